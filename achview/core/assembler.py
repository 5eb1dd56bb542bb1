"""Single-pass assembly of NACHA lines into a NachaDocument.

The assembler is a small state machine keyed by each line's record-type
code::

    EXPECTING_FILE_HEADER --1--> IN_FILE --9--> TERMINATED

While in the file it keeps two integer cursors: the index of the most
recently opened batch and the index of the most recently appended entry in
that batch. Detail entries and batch controls attach to the current batch;
addenda attach to the current entry. Once the file control record is seen,
parsing stops and any remaining lines (block padding) are ignored.

Every fatal error aborts the parse; no partially built document is ever
returned.
"""

import io
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from achview.core.decoders import DECODERS
from achview.core.exceptions import (
    DecodeError,
    MissingBatchHeader,
    MissingDetailEntry,
    MissingFileControl,
    MissingFileHeader,
    ReaderError,
    UnknownRecordType,
)
from achview.core.model import (
    Addendum,
    Batch,
    BatchControl,
    BatchHeader,
    DetailEntry,
    FileControl,
    FileHeader,
    NachaDocument,
)
from achview.core.records import RecordType

logger = logging.getLogger(__name__)


class AssemblerState(Enum):
    EXPECTING_FILE_HEADER = "expecting_file_header"
    IN_FILE = "in_file"
    TERMINATED = "terminated"


@dataclass
class _PendingEntry:
    entry: DetailEntry
    addenda: list[Addendum] = field(default_factory=list)


@dataclass
class _PendingBatch:
    header: BatchHeader
    entries: list[_PendingEntry] = field(default_factory=list)
    control: BatchControl | None = None


class DocumentAssembler:
    """Build a NachaDocument from lines fed one at a time.

    Example:
        >>> assembler = DocumentAssembler()
        >>> for line in lines:
        ...     if not assembler.feed(line):
        ...         break
        >>> document = assembler.finish()

    Args:
        strict: Raise UnknownRecordType for unrecognized non-blank lines
               instead of skipping them
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self.state = AssemblerState.EXPECTING_FILE_HEADER
        self.line_number = 0
        self.current_batch: int | None = None
        self.current_entry: int | None = None
        self._file_header: FileHeader | None = None
        self._file_control: FileControl | None = None
        self._batches: list[_PendingBatch] = []

    def feed(self, line: str) -> bool:
        """Consume one line.

        Returns:
            False once the file control record has been seen and further
            lines would be ignored, True otherwise

        Raises:
            DecodeError: If a mandatory field of the record cannot be decoded
            StructuralError: If the record is out of order
            UnknownRecordType: In strict mode, for unrecognized records
        """
        if self.state is AssemblerState.TERMINATED:
            return False

        self.line_number += 1
        line = line.rstrip("\r\n")
        record_type = RecordType.classify(line)

        if record_type is RecordType.UNRECOGNIZED:
            self._skip(line)
            return True

        try:
            record = DECODERS[record_type](line)
        except DecodeError as e:
            e.context["record"] = record_type.name
            e.context["line_number"] = self.line_number
            e.context["line"] = line
            raise

        if record_type is RecordType.FILE_HEADER:
            logger.debug("file header found")
            if self._file_header is not None:
                logger.warning("Replacing file header at line %d", self.line_number)
            self._file_header = record
            self.state = AssemblerState.IN_FILE
        elif record_type is RecordType.BATCH_HEADER:
            logger.debug("batch header found")
            self._batches.append(_PendingBatch(header=record))
            self.current_batch = len(self._batches) - 1
            self.current_entry = None
        elif record_type is RecordType.ENTRY_DETAIL:
            logger.debug("detail entry found")
            batch = self._require_batch(line)
            batch.entries.append(_PendingEntry(entry=record))
            self.current_entry = len(batch.entries) - 1
        elif record_type is RecordType.ADDENDA:
            logger.debug("addendum entry found")
            self._require_entry(line).addenda.append(record)
        elif record_type is RecordType.BATCH_CONTROL:
            logger.debug("batch control found")
            self._require_batch(line).control = record
        elif record_type is RecordType.FILE_CONTROL:
            logger.debug("file control found")
            self._file_control = record
            self.state = AssemblerState.TERMINATED
            return False

        return True

    def finish(self) -> NachaDocument:
        """Freeze the assembled records into a NachaDocument.

        Raises:
            MissingFileHeader: If no file header record was seen
            MissingFileControl: If the input ended before a file control record
        """
        if self._file_header is None:
            raise MissingFileHeader(
                "No file header record found", line_number=self.line_number
            )
        if self._file_control is None:
            raise MissingFileControl(
                "Input ended before the file control record",
                line_number=self.line_number,
            )

        batches = tuple(
            Batch(
                batch_header=pending.header,
                detail_entries=tuple(
                    replace(item.entry, addenda=tuple(item.addenda))
                    for item in pending.entries
                ),
                batch_control=pending.control,
            )
            for pending in self._batches
        )
        document = NachaDocument(
            file_header=self._file_header,
            batches=batches,
            file_control=self._file_control,
        )
        logger.info(
            "Done parsing file: %d batches, %d entries, %d addenda",
            len(document.batches),
            document.entry_count,
            document.addenda_count,
        )
        return document

    def _skip(self, line: str) -> None:
        if not line.strip():
            logger.debug("Skipping blank line %d", self.line_number)
            return
        if self.strict:
            raise UnknownRecordType(
                f"Unrecognized record type {line[:1]!r}",
                code=line[:1],
                line_number=self.line_number,
                line=line,
            )
        logger.debug("unknown record found at line %d: %r", self.line_number, line[:1])

    def _require_batch(self, line: str) -> _PendingBatch:
        if self.current_batch is None:
            raise MissingBatchHeader(
                "Record appears before any batch header",
                line_number=self.line_number,
                line=line,
            )
        return self._batches[self.current_batch]

    def _require_entry(self, line: str) -> _PendingEntry:
        if self.current_batch is None or self.current_entry is None:
            raise MissingDetailEntry(
                "Addendum appears before any detail entry in the current batch",
                line_number=self.line_number,
                line=line,
            )
        return self._batches[self.current_batch].entries[self.current_entry]


def assemble(lines: Iterable[str], strict: bool = False) -> NachaDocument:
    """Assemble a document from an iterable of lines.

    Lines are consumed lazily and iteration stops at the file control
    record, so trailing padding is never read.

    Args:
        lines: Record lines, with or without line terminators
        strict: Treat unrecognized record codes as fatal

    Returns:
        The completed NachaDocument

    Raises:
        DecodeError: On mandatory field failures (FieldRangeError, FieldFormatError)
        StructuralError: On out-of-order or missing records
        UnknownRecordType: In strict mode, for unrecognized records
    """
    assembler = DocumentAssembler(strict=strict)
    for line in lines:
        if not assembler.feed(line):
            break
    return assembler.finish()


def parse_text(text: str, strict: bool = False) -> NachaDocument:
    """Assemble a document from the full text of a NACHA file.

    Lines are split on line terminators only (``\\n``, ``\\r\\n``, ``\\r``),
    exactly as parse_file() splits them.
    """
    return assemble(io.StringIO(text, newline=""), strict=strict)


def parse_file(path: Path, strict: bool = False) -> NachaDocument:
    """Read and assemble a NACHA file from disk.

    The file is read as Latin-1, so every byte maps to one character and
    column offsets match byte offsets.

    Raises:
        ReaderError: If the file cannot be opened
        DecodeError, StructuralError, UnknownRecordType: As for assemble()
    """
    logger.debug("Reading %s", path)
    try:
        with open(path, encoding="latin-1", newline="") as fo:
            return assemble(fo, strict=strict)
    except OSError as e:
        raise ReaderError(
            f"Cannot read input file: {e}",
            file_path=str(path),
            reason=type(e).__name__,
        ) from e