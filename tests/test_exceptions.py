"""Unit tests for custom exception classes."""

import pytest

from achview.core.exceptions import (
    AchviewError,
    DecodeError,
    FieldFormatError,
    FieldRangeError,
    MissingBatchHeader,
    MissingDetailEntry,
    ReaderError,
    StructuralError,
    UnknownRecordType,
    WriterError,
)


class TestAchviewError:
    """Test the base AchviewError exception."""

    def test_basic_message(self) -> None:
        error = AchviewError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.context == {}
        assert error.line_number is None

    def test_with_context(self) -> None:
        error = AchviewError("Parse failed", context={"line_number": 7, "record": "ADDENDA"})
        assert error.line_number == 7
        assert "line_number=7" in str(error)
        assert "record='ADDENDA'" in str(error)


class TestFieldErrors:
    """Test the field-level decode errors."""

    def test_range_error_context(self) -> None:
        error = FieldRangeError(
            "Line too short", field="amount", start=29, end=39, line_length=30
        )
        assert isinstance(error, DecodeError)
        assert error.context == {"field": "amount", "start": 29, "end": 39, "line_length": 30}

    def test_format_error_context(self) -> None:
        error = FieldFormatError("Not numeric", field="amount", value="12X", expected="digits")
        assert isinstance(error, DecodeError)
        assert "value='12X'" in str(error)

    def test_omitted_context_is_not_recorded(self) -> None:
        assert FieldFormatError("Not numeric").context == {}


class TestStructuralErrors:
    """Test the out-of-order record errors."""

    @pytest.mark.parametrize(
        "cls,kind",
        [(MissingBatchHeader, "MissingBatchHeader"), (MissingDetailEntry, "MissingDetailEntry")],
    )
    def test_kind_is_recorded(self, cls: type[StructuralError], kind: str) -> None:
        error = cls("Out of order", line_number=4, line="6...")
        assert isinstance(error, StructuralError)
        assert error.kind == kind
        assert error.context["kind"] == kind
        assert error.line_number == 4

    def test_catch_all(self) -> None:
        with pytest.raises(AchviewError):
            raise MissingDetailEntry("Addendum without entry")


class TestOtherErrors:
    """Test unknown record, reader and writer errors."""

    def test_unknown_record_type(self) -> None:
        error = UnknownRecordType("Unrecognized record type '4'", code="4")
        assert error.context == {"code": "4"}
        assert not isinstance(error, DecodeError)

    def test_reader_error(self) -> None:
        error = ReaderError("Cannot read", file_path="/tmp/x.ach", reason="FileNotFoundError")
        assert error.context["file_path"] == "/tmp/x.ach"

    def test_writer_error(self) -> None:
        error = WriterError("Cannot write", output_path="out.parquet", format="parquet")
        assert "format='parquet'" in str(error)
