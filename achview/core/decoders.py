"""Pure line-to-record decoders.

Each decoder extracts the column ranges of its layout from a single line,
trims surrounding whitespace and coerces the text per the field's semantic
type. Decoders have no side effects and know nothing about where the line
sits in the file; the assembler adds line numbers to any error raised here.

Coercion rules:
    - TEXT never fails. A line that ends inside or before the field yields
      whatever text is available.
    - INTEGER must be all ASCII digits, otherwise FieldFormatError.
    - DATE / TIME / JULIAN yield None when unparsable; these fields are
      informational only.
    - Mandatory fields (record type code, integers) raise FieldRangeError
      when the line ends before the field does.
"""

from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from typing import Any

from achview.core.exceptions import FieldFormatError, FieldRangeError
from achview.core.layouts import (
    ADDENDA_LAYOUT,
    BATCH_CONTROL_LAYOUT,
    BATCH_HEADER_LAYOUT,
    ENTRY_DETAIL_LAYOUT,
    FILE_CONTROL_LAYOUT,
    FILE_HEADER_LAYOUT,
    FieldSpec,
    FieldType,
)
from achview.core.model import (
    Addendum,
    BatchControl,
    BatchHeader,
    DetailEntry,
    FileControl,
    FileHeader,
)
from achview.core.records import RecordType


def _is_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def parse_integer(value: str, field: str = "value") -> int:
    """Parse an unsigned integer field such as an amount in cents.

    Raises:
        FieldFormatError: If the value is empty or contains anything but digits

    Example:
        >>> parse_integer("0000001000")
        1000
    """
    if not _is_digits(value):
        reason = "is empty" if not value else "is not numeric"
        raise FieldFormatError(
            f"Field '{field}' {reason}",
            field=field,
            value=value,
            expected="digits",
        )
    return int(value)


def parse_date(value: str) -> date | None:
    """Parse a YYMMDD date, returning None if it is not a calendar date."""
    if len(value) != 6 or not _is_digits(value):
        return None
    try:
        return datetime.strptime(value, "%y%m%d").date()
    except ValueError:
        return None


def parse_time(value: str) -> time | None:
    """Parse an HHMM time of day, returning None if it is not valid."""
    if len(value) != 4 or not _is_digits(value):
        return None
    try:
        return datetime.strptime(value, "%H%M").time()
    except ValueError:
        return None


def parse_julian_day(value: str) -> int | None:
    """Parse a 3-digit day of year (001-366)."""
    if len(value) != 3 or not _is_digits(value):
        return None
    day = int(value)
    if not 1 <= day <= 366:
        return None
    return day


def resolve_settlement_date(day: int | None, effective: date | None) -> date | None:
    """Turn a Julian settlement day into a date near the effective entry date.

    Settlement happens on or shortly after the effective date, so a day that
    lands more than half a year before it belongs to the following year.

    Example:
        >>> resolve_settlement_date(2, date(2023, 12, 29))
        datetime.date(2024, 1, 2)
    """
    if day is None or effective is None:
        return None

    def in_year(year: int) -> date | None:
        candidate = date(year, 1, 1) + timedelta(days=day - 1)
        return candidate if candidate.year == year else None

    resolved = in_year(effective.year)
    if resolved is None or (effective - resolved).days <= 182:
        return resolved
    return in_year(effective.year + 1)


_COERCERS: dict[FieldType, Callable[[str], Any]] = {
    FieldType.TEXT: lambda value: value,
    FieldType.DATE: parse_date,
    FieldType.TIME: parse_time,
    FieldType.JULIAN: parse_julian_day,
}


def decode_field(line: str, spec: FieldSpec) -> Any:
    """Extract and coerce a single field from a line.

    Args:
        line: Raw record line without its line terminator
        spec: Field to extract

    Returns:
        The coerced value (str, int, date, time or None)

    Raises:
        FieldRangeError: If the line is shorter than a mandatory field
        FieldFormatError: If an integer field is not numeric
    """
    if spec.required and len(line) < spec.end:
        raise FieldRangeError(
            f"Line too short for field '{spec.name}'",
            field=spec.name,
            start=spec.start,
            end=spec.end,
            line_length=len(line),
        )

    value = line[spec.start:spec.end].strip()
    if spec.kind is FieldType.INTEGER:
        return parse_integer(value, spec.name)
    return _COERCERS[spec.kind](value)


def decode_fields(line: str, layout: tuple[FieldSpec, ...]) -> dict[str, Any]:
    """Decode every field of a layout into a name → value mapping."""
    return {spec.name: decode_field(line, spec) for spec in layout}


def decode_file_header(line: str) -> FileHeader:
    return FileHeader(**decode_fields(line, FILE_HEADER_LAYOUT))


def decode_batch_header(line: str) -> BatchHeader:
    fields = decode_fields(line, BATCH_HEADER_LAYOUT)
    fields["settlement_date"] = resolve_settlement_date(
        fields["settlement_date"], fields["effective_entry_date"]
    )
    return BatchHeader(**fields)


def decode_entry_detail(line: str) -> DetailEntry:
    return DetailEntry(**decode_fields(line, ENTRY_DETAIL_LAYOUT))


def decode_addendum(line: str) -> Addendum:
    return Addendum(**decode_fields(line, ADDENDA_LAYOUT))


def decode_batch_control(line: str) -> BatchControl:
    return BatchControl(**decode_fields(line, BATCH_CONTROL_LAYOUT))


def decode_file_control(line: str) -> FileControl:
    return FileControl(**decode_fields(line, FILE_CONTROL_LAYOUT))


DECODERS: dict[RecordType, Callable[[str], Any]] = {
    RecordType.FILE_HEADER: decode_file_header,
    RecordType.BATCH_HEADER: decode_batch_header,
    RecordType.ENTRY_DETAIL: decode_entry_detail,
    RecordType.ADDENDA: decode_addendum,
    RecordType.BATCH_CONTROL: decode_batch_control,
    RecordType.FILE_CONTROL: decode_file_control,
}


def decode_record(line: str, record_type: RecordType | None = None) -> Any:
    """Decode a line with the decoder for its record kind.

    Args:
        line: Raw record line
        record_type: Kind to decode as; classified from the line if omitted

    Returns:
        The decoded record

    Raises:
        KeyError: If the line's kind is UNRECOGNIZED
        FieldRangeError, FieldFormatError: On mandatory field failures
    """
    if record_type is None:
        record_type = RecordType.classify(line)
    return DECODERS[record_type](line)
