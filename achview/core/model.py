"""Document model for a decoded NACHA file.

The model is a strict ownership tree::

    NachaDocument
        FileHeader
        Batch (file order)
            BatchHeader
            DetailEntry (entry order)
                Addendum (addenda order)
            BatchControl (optional)
        FileControl

All classes are frozen dataclasses holding tuples, so a completed document
cannot be mutated. Amounts and totals are unsigned integers in cents.
"""

from dataclasses import dataclass
from datetime import date, time


@dataclass(frozen=True)
class FileHeader:
    record_type_code: str
    priority_code: str
    immediate_destination: str
    immediate_origin: str
    file_creation_date: date | None
    file_creation_time: time | None
    file_id_modifier: str
    record_size: str
    blocking_factor: str
    format_code: str
    immediate_destination_name: str
    immediate_origin_name: str
    reference_code: str


@dataclass(frozen=True)
class BatchHeader:
    record_type_code: str
    service_class_code: str
    company_name: str
    company_discretionary_data: str
    company_id: str
    standard_entry_class_code: str
    company_entry_description: str
    company_descriptive_date: str
    effective_entry_date: date | None
    settlement_date: date | None
    originator_status_code: str
    originating_dfi_id: str
    batch_number: str


@dataclass(frozen=True)
class Addendum:
    record_type_code: str
    addenda_type_code: str
    payment_related_info: str
    addenda_sequence_number: str
    entry_detail_sequence_number: str


@dataclass(frozen=True)
class DetailEntry:
    """A single debit or credit transaction and its addenda."""

    record_type_code: str
    transaction_code: str
    receiving_dfi_id: str
    check_digit: str
    dfi_account_number: str
    amount: int
    individual_id_number: str
    individual_name: str
    discretionary_data: str
    addenda_record_indicator: str
    trace_number: str
    addenda: tuple[Addendum, ...] = ()

    @property
    def has_addenda(self) -> bool:
        return len(self.addenda) > 0

    @property
    def direction(self) -> str:
        """Money movement of the entry: "credit", "debit" or "unknown".

        The last digit of the transaction code encodes it: 1-4 are credits
        to the receiver (returns, deposits, prenotes, zero-dollar), 6-9 are
        the matching debits.
        """
        code = self.transaction_code
        if len(code) != 2 or not code.isdigit():
            return "unknown"
        if code[1] in "1234":
            return "credit"
        if code[1] in "6789":
            return "debit"
        return "unknown"


@dataclass(frozen=True)
class BatchControl:
    record_type_code: str
    service_class_code: str
    entry_and_addenda_count: int
    entry_hash: str
    total_debit: int
    total_credit: int
    company_id: str
    message_authentication_code: str
    reserved: str
    originating_dfi_id: str
    batch_number: str


@dataclass(frozen=True)
class FileControl:
    record_type_code: str
    batch_count: int
    block_count: int
    entry_and_addenda_count: int
    entry_hash: str
    total_debit: int
    total_credit: int
    reserved: str


@dataclass(frozen=True)
class Batch:
    """A batch header, its entries in file order and its optional control."""

    batch_header: BatchHeader
    detail_entries: tuple[DetailEntry, ...] = ()
    batch_control: BatchControl | None = None


@dataclass(frozen=True)
class NachaDocument:
    """A fully assembled NACHA file.

    Attributes:
        file_header: The single file header record
        batches: Batches in file order
        file_control: The single file control record
    """

    file_header: FileHeader
    batches: tuple[Batch, ...]
    file_control: FileControl

    @property
    def entry_count(self) -> int:
        return sum(len(batch.detail_entries) for batch in self.batches)

    @property
    def addenda_count(self) -> int:
        return sum(
            len(entry.addenda)
            for batch in self.batches
            for entry in batch.detail_entries
        )
