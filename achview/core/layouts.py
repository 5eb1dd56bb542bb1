"""Fixed-width field layouts for each NACHA record kind.

Every record is a 94-character line. A layout is an ordered tuple of
``FieldSpec`` entries giving the field name, its zero-based half-open column
range and the semantic type used to coerce the trimmed text.

Semantic types:
    - TEXT: trimmed substring, always succeeds
    - INTEGER: unsigned digits (counts and implied-cents amounts), mandatory
    - DATE: YYMMDD calendar date, absent on failure
    - TIME: HHMM time of day, absent on failure
    - JULIAN: 3-digit day of year, absent on failure
"""

from dataclasses import dataclass
from enum import Enum

from achview.core.records import RecordType

RECORD_LENGTH = 94


class FieldType(Enum):
    """Semantic type of a fixed-width field."""

    TEXT = "text"
    INTEGER = "integer"
    DATE = "date"
    TIME = "time"
    JULIAN = "julian"


@dataclass(frozen=True)
class FieldSpec:
    """A single column range within a record line.

    Attributes:
        name: Field name, matching the model attribute it populates
        start: Zero-based start offset (inclusive)
        end: Zero-based end offset (exclusive)
        kind: Semantic type used for coercion
        required: Whether a line too short for this field is fatal
    """

    name: str
    start: int
    end: int
    kind: FieldType = FieldType.TEXT
    required: bool = False


def _text(name: str, start: int, end: int) -> FieldSpec:
    return FieldSpec(name, start, end)


def _integer(name: str, start: int, end: int) -> FieldSpec:
    return FieldSpec(name, start, end, FieldType.INTEGER, required=True)


def _date(name: str, start: int, end: int) -> FieldSpec:
    return FieldSpec(name, start, end, FieldType.DATE)


RECORD_TYPE_CODE = FieldSpec("record_type_code", 0, 1, required=True)

FILE_HEADER_LAYOUT = (
    RECORD_TYPE_CODE,
    _text("priority_code", 1, 3),
    _text("immediate_destination", 3, 13),
    _text("immediate_origin", 13, 23),
    _date("file_creation_date", 23, 29),
    FieldSpec("file_creation_time", 29, 33, FieldType.TIME),
    _text("file_id_modifier", 33, 34),
    _text("record_size", 34, 37),
    _text("blocking_factor", 37, 39),
    _text("format_code", 39, 40),
    _text("immediate_destination_name", 40, 63),
    _text("immediate_origin_name", 63, 86),
    _text("reference_code", 86, 94),
)

BATCH_HEADER_LAYOUT = (
    RECORD_TYPE_CODE,
    _text("service_class_code", 1, 4),
    _text("company_name", 4, 20),
    _text("company_discretionary_data", 20, 40),
    _text("company_id", 40, 50),
    _text("standard_entry_class_code", 50, 53),
    _text("company_entry_description", 53, 63),
    _text("company_descriptive_date", 63, 69),
    _date("effective_entry_date", 69, 75),
    FieldSpec("settlement_date", 75, 78, FieldType.JULIAN),
    _text("originator_status_code", 78, 79),
    _text("originating_dfi_id", 79, 87),
    _text("batch_number", 87, 94),
)

ENTRY_DETAIL_LAYOUT = (
    RECORD_TYPE_CODE,
    _text("transaction_code", 1, 3),
    _text("receiving_dfi_id", 3, 11),
    _text("check_digit", 11, 12),
    _text("dfi_account_number", 12, 29),
    _integer("amount", 29, 39),
    _text("individual_id_number", 39, 54),
    _text("individual_name", 54, 76),
    _text("discretionary_data", 76, 78),
    _text("addenda_record_indicator", 78, 79),
    _text("trace_number", 79, 94),
)

ADDENDA_LAYOUT = (
    RECORD_TYPE_CODE,
    _text("addenda_type_code", 1, 3),
    _text("payment_related_info", 3, 83),
    _text("addenda_sequence_number", 83, 87),
    _text("entry_detail_sequence_number", 87, 94),
)

BATCH_CONTROL_LAYOUT = (
    RECORD_TYPE_CODE,
    _text("service_class_code", 1, 4),
    _integer("entry_and_addenda_count", 4, 10),
    _text("entry_hash", 10, 20),
    _integer("total_debit", 20, 32),
    _integer("total_credit", 32, 44),
    _text("company_id", 44, 54),
    _text("message_authentication_code", 54, 73),
    _text("reserved", 73, 79),
    _text("originating_dfi_id", 79, 87),
    _text("batch_number", 87, 94),
)

FILE_CONTROL_LAYOUT = (
    RECORD_TYPE_CODE,
    _integer("batch_count", 1, 7),
    _integer("block_count", 7, 13),
    _integer("entry_and_addenda_count", 13, 21),
    _text("entry_hash", 21, 31),
    _integer("total_debit", 31, 43),
    _integer("total_credit", 43, 55),
    _text("reserved", 55, 94),
)

LAYOUTS: dict[RecordType, tuple[FieldSpec, ...]] = {
    RecordType.FILE_HEADER: FILE_HEADER_LAYOUT,
    RecordType.BATCH_HEADER: BATCH_HEADER_LAYOUT,
    RecordType.ENTRY_DETAIL: ENTRY_DETAIL_LAYOUT,
    RecordType.ADDENDA: ADDENDA_LAYOUT,
    RecordType.BATCH_CONTROL: BATCH_CONTROL_LAYOUT,
    RecordType.FILE_CONTROL: FILE_CONTROL_LAYOUT,
}
