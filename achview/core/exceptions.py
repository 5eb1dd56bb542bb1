"""Custom exception classes for achview error handling.

This module defines the exception hierarchy for decoding ACH/NACHA files:
- DecodeError: A single fixed-width field could not be decoded
  - FieldRangeError: The line ends before a mandatory field
  - FieldFormatError: A mandatory numeric field is not a number
- StructuralError: A record appeared where the file layout does not allow it
  - MissingBatchHeader: Entry or batch control before any batch header
  - MissingDetailEntry: Addendum before any detail entry in the batch
- UnknownRecordType: Unrecognized record-type code (strict mode only)
- ReaderError: The input source could not be read
- WriterError: Output serialization failures
- ValidationError: Exported entry frame does not match its schema
- PipelineError: Unexpected failure while parsing and writing

All exceptions inherit from AchviewError for consistent error handling.
"""

from typing import Any


class AchviewError(Exception):
    """Base exception for all achview errors.

    Provides a common base class for all custom exceptions, enabling
    catch-all error handling when needed.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (line
                    numbers, field names, raw values, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"

    @property
    def line_number(self) -> int | None:
        """1-based input line number the error was raised for, if known."""
        return self.context.get("line_number")


class DecodeError(AchviewError):
    """A fixed-width field could not be decoded from a record line.

    Context typically includes:
        - field: Name of the field being decoded
        - record: Record kind the field belongs to
        - line_number: 1-based line number (added by the assembler)
        - line: Raw line content (added by the assembler)
    """


class FieldRangeError(DecodeError):
    """Exception raised when a line is too short for a mandatory field."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        start: int | None = None,
        end: int | None = None,
        line_length: int | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize range error with the offending column range.

        Args:
            message: Human-readable error description
            field: Name of the field that could not be extracted
            start: Zero-based start offset of the field
            end: Zero-based, exclusive end offset of the field
            line_length: Actual length of the line
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if field is not None:
            context["field"] = field
        if start is not None:
            context["start"] = start
        if end is not None:
            context["end"] = end
        if line_length is not None:
            context["line_length"] = line_length
        context.update(extra_context)

        super().__init__(message, context)


class FieldFormatError(DecodeError):
    """Exception raised when a mandatory numeric field cannot be parsed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        expected: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize format error with the raw field value.

        Args:
            message: Human-readable error description
            field: Name of the field that failed to parse
            value: Trimmed raw text of the field
            expected: Description of the expected format (e.g. "digits")
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if field is not None:
            context["field"] = field
        if value is not None:
            context["value"] = value
        if expected is not None:
            context["expected"] = expected
        context.update(extra_context)

        super().__init__(message, context)


class StructuralError(AchviewError):
    """Exception raised when records appear out of order.

    The ``kind`` attribute names the violated rule, one of
    ``MissingBatchHeader``, ``MissingDetailEntry``, ``MissingFileHeader``
    or ``MissingFileControl``.
    """

    kind = "StructuralError"

    def __init__(self, message: str, **extra_context: Any) -> None:
        super().__init__(message, {"kind": self.kind, **extra_context})


class MissingBatchHeader(StructuralError):
    """A detail entry or batch control appeared before any batch header."""

    kind = "MissingBatchHeader"


class MissingDetailEntry(StructuralError):
    """An addendum appeared before any detail entry in the current batch."""

    kind = "MissingDetailEntry"


class MissingFileHeader(StructuralError):
    """The input contained no file header record."""

    kind = "MissingFileHeader"


class MissingFileControl(StructuralError):
    """The input ended before a file control record was seen."""

    kind = "MissingFileControl"


class UnknownRecordType(AchviewError):
    """Exception raised for an unrecognized record-type code in strict mode.

    In the default lenient mode such lines are skipped and this exception
    is never raised.
    """

    def __init__(self, message: str, code: str | None = None, **extra_context: Any) -> None:
        context: dict[str, Any] = {}
        if code is not None:
            context["code"] = code
        context.update(extra_context)

        super().__init__(message, context)


class ReaderError(AchviewError):
    """Exception raised when the input source cannot be read.

    Context typically includes:
        - file_path: Path to the input file
        - reason: Specific reason for the failure
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if file_path is not None:
            context["file_path"] = file_path
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class WriterError(AchviewError):
    """Exception raised when writing/serializing output fails.

    Context typically includes:
        - output_path: Path where the output should be written
        - format: Target format
        - reason: Specific reason for the serialization failure
    """

    def __init__(
        self,
        message: str,
        output_path: str | None = None,
        format: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize writer error with output details.

        Args:
            message: Human-readable error description
            output_path: Path where the output should be written
            format: Target format (e.g., "parquet", "yaml")
            reason: Specific reason for the serialization failure
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if output_path is not None:
            context["output_path"] = output_path
        if format is not None:
            context["format"] = format
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class ValidationError(AchviewError):
    """Exception raised when an exported entry frame violates its schema.

    Context typically includes:
        - field: Name of the problematic column
        - expected_type: Expected data type for the column
        - actual_type: Actual data type found
        - missing_fields: List of missing columns
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        expected_type: str | None = None,
        actual_type: str | None = None,
        missing_fields: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if field is not None:
            context["field"] = field
        if expected_type is not None:
            context["expected_type"] = expected_type
        if actual_type is not None:
            context["actual_type"] = actual_type
        if missing_fields is not None:
            context["missing_fields"] = missing_fields
        context.update(extra_context)

        super().__init__(message, context)


class PipelineError(AchviewError):
    """Exception raised when the parse → write flow fails unexpectedly.

    Errors that already belong to the achview hierarchy propagate unchanged;
    anything else is wrapped with the step that failed.

    Context typically includes:
        - step: Which step failed (read, write)
        - input_path: Path to the input file
        - output_path: Path to the output file
    """

    def __init__(
        self,
        message: str,
        step: str | None = None,
        input_path: str | None = None,
        output_path: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if step is not None:
            context["step"] = step
        if input_path is not None:
            context["input_path"] = input_path
        if output_path is not None:
            context["output_path"] = output_path
        context.update(extra_context)

        super().__init__(message, context)
