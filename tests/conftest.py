"""Shared line builders, fixtures and Hypothesis strategies for achview tests."""

from pathlib import Path

import pytest
from hypothesis import strategies as st
from hypothesis.strategies import composite


def _number(value: int | str, width: int) -> str:
    """Zero-pad an int, or pass a raw string through left-justified."""
    if isinstance(value, int):
        return str(value).zfill(width)
    return value.ljust(width)[:width]


def file_header_line(
    destination: str = " 091000019",
    origin: str = "1234567890",
    creation_date: str = "240115",
    creation_time: str = "1030",
    destination_name: str = "FIRST BANK",
    origin_name: str = "ACME CORP",
    reference_code: str = "REF00001",
) -> str:
    line = (
        "1"
        + "01"
        + destination.rjust(10)
        + origin.rjust(10)
        + creation_date.ljust(6)
        + creation_time.ljust(4)
        + "A"
        + "094"
        + "10"
        + "1"
        + destination_name.ljust(23)
        + origin_name.ljust(23)
        + reference_code.ljust(8)
    )
    assert len(line) == 94
    return line


def batch_header_line(
    company_name: str = "ACME CORP",
    company_id: str = "1234567890",
    sec_code: str = "PPD",
    description: str = "PAYROLL",
    effective_date: str = "240116",
    settlement_day: str = "016",
    odfi: str = "09100001",
    batch_number: int = 1,
    service_class_code: str = "220",
) -> str:
    line = (
        "5"
        + service_class_code
        + company_name.ljust(16)
        + "".ljust(20)
        + company_id.ljust(10)
        + sec_code
        + description.ljust(10)
        + "".ljust(6)
        + effective_date.ljust(6)
        + settlement_day.ljust(3)
        + "1"
        + odfi.ljust(8)
        + str(batch_number).zfill(7)
    )
    assert len(line) == 94
    return line


def entry_line(
    amount: int | str = 1000,
    transaction_code: str = "22",
    receiving_dfi: str = "09100001",
    check_digit: str = "9",
    account: str = "123456789",
    individual_id: str = "EMP001",
    name: str = "JANE DOE",
    addenda_indicator: str = "0",
    trace_number: str = "091000010000001",
) -> str:
    line = (
        "6"
        + transaction_code
        + receiving_dfi.ljust(8)
        + check_digit
        + account.ljust(17)
        + _number(amount, 10)
        + individual_id.ljust(15)
        + name.ljust(22)
        + "  "
        + addenda_indicator
        + trace_number.ljust(15)
    )
    assert len(line) == 94
    return line


def addenda_line(
    info: str = "INVOICE 42",
    sequence: str = "0001",
    entry_sequence: str = "0000001",
    type_code: str = "05",
) -> str:
    line = "7" + type_code + info.ljust(80) + sequence + entry_sequence
    assert len(line) == 94
    return line


def batch_control_line(
    entry_count: int | str = 1,
    entry_hash: str = "0009100001",
    total_debit: int | str = 0,
    total_credit: int | str = 1000,
    company_id: str = "1234567890",
    odfi: str = "09100001",
    batch_number: int = 1,
    service_class_code: str = "220",
) -> str:
    line = (
        "8"
        + service_class_code
        + _number(entry_count, 6)
        + entry_hash.rjust(10, "0")
        + _number(total_debit, 12)
        + _number(total_credit, 12)
        + company_id.ljust(10)
        + "".ljust(19)
        + "".ljust(6)
        + odfi.ljust(8)
        + str(batch_number).zfill(7)
    )
    assert len(line) == 94
    return line


def file_control_line(
    batch_count: int | str = 1,
    block_count: int | str = 1,
    entry_and_addenda_count: int | str = 2,
    entry_hash: str = "0009100001",
    total_debit: int | str = 0,
    total_credit: int | str = 1000,
) -> str:
    line = (
        "9"
        + _number(batch_count, 6)
        + _number(block_count, 6)
        + _number(entry_and_addenda_count, 8)
        + entry_hash.rjust(10, "0")
        + _number(total_debit, 12)
        + _number(total_credit, 12)
        + "".ljust(39)
    )
    assert len(line) == 94
    return line


FILLER_LINE = "9" * 94


def minimal_file_lines() -> list[str]:
    """One batch, one entry of 1000 cents, one addendum."""
    return [
        file_header_line(),
        batch_header_line(),
        entry_line(amount=1000, addenda_indicator="1"),
        addenda_line(),
        batch_control_line(),
        file_control_line(batch_count=1, entry_and_addenda_count=2),
    ]


def two_batch_file_lines() -> list[str]:
    """Batch 1 with 2 entries, batch 2 with 3 entries, padded to a full block."""
    lines = [
        file_header_line(),
        batch_header_line(batch_number=1),
        entry_line(amount=100, name="ALICE", trace_number="091000010000001"),
        entry_line(amount=200, name="BOB", trace_number="091000010000002"),
        batch_control_line(entry_count=2, total_credit=300, batch_number=1),
        batch_header_line(batch_number=2, service_class_code="225", description="BILLING"),
        entry_line(amount=300, transaction_code="27", name="CAROL", trace_number="091000010000003"),
        entry_line(amount=400, transaction_code="27", name="DAVE", trace_number="091000010000004"),
        entry_line(amount=500, transaction_code="27", name="ERIN", trace_number="091000010000005"),
        batch_control_line(entry_count=3, total_debit=1200, total_credit=0, batch_number=2),
        file_control_line(
            batch_count=2,
            block_count=2,
            entry_and_addenda_count=5,
            total_debit=1200,
            total_credit=300,
        ),
    ]
    return lines + [FILLER_LINE] * (20 - len(lines))


@pytest.fixture
def ach_file(tmp_path: Path) -> Path:
    """A two-batch NACHA file on disk."""
    path = tmp_path / "payroll.ach"
    path.write_text("\n".join(two_batch_file_lines()) + "\n")
    return path


@composite
def ascii_record_line(draw: st.DrawFn, code: str | None = None) -> str:
    """Generate an arbitrary 94-character printable ASCII line.

    Args:
        code: Leading record-type code; random printable character if None
    """
    if code is None:
        code = draw(st.characters(min_codepoint=32, max_codepoint=126))
    body = draw(
        st.text(
            alphabet=st.characters(min_codepoint=32, max_codepoint=126),
            min_size=93,
            max_size=93,
        )
    )
    return code + body


@composite
def batch_entry_counts(draw: st.DrawFn) -> list[int]:
    """Generate per-batch entry counts for multi-batch files."""
    return draw(st.lists(st.integers(min_value=0, max_value=6), min_size=0, max_size=6))


def file_with_batches(counts: list[int]) -> list[str]:
    """Build a file with one batch per count, each holding that many entries."""
    lines = [file_header_line()]
    trace = 0
    for batch_number, count in enumerate(counts, start=1):
        lines.append(batch_header_line(batch_number=batch_number))
        for _ in range(count):
            trace += 1
            lines.append(
                entry_line(amount=trace, trace_number=f"09100001{trace:07d}")
            )
        lines.append(batch_control_line(entry_count=count, batch_number=batch_number))
    lines.append(
        file_control_line(batch_count=len(counts), entry_and_addenda_count=sum(counts))
    )
    return lines
