"""Unit tests for the document assembler state machine.

Test Coverage:
- Minimal end-to-end assembly
- Attachment of entries, addenda and batch controls to the current cursor
- Fail-fast structural errors with line diagnostics
- Lenient skipping of unknown records, and strict mode
- Termination at the first file control record
"""

from pathlib import Path

import pytest
from hypothesis import given

from achview.core.assembler import (
    AssemblerState,
    DocumentAssembler,
    assemble,
    parse_file,
    parse_text,
)
from achview.core.exceptions import (
    FieldFormatError,
    FieldRangeError,
    MissingBatchHeader,
    MissingDetailEntry,
    MissingFileControl,
    MissingFileHeader,
    ReaderError,
    StructuralError,
    UnknownRecordType,
)
from tests.conftest import (
    FILLER_LINE,
    addenda_line,
    batch_control_line,
    batch_entry_counts,
    batch_header_line,
    entry_line,
    file_control_line,
    file_header_line,
    file_with_batches,
    minimal_file_lines,
    two_batch_file_lines,
)


class TestMinimalFile:
    """A header, one batch, one entry, one addendum and a file control."""

    def test_minimal_end_to_end(self) -> None:
        document = assemble(minimal_file_lines())

        assert len(document.batches) == 1
        batch = document.batches[0]
        assert len(batch.detail_entries) == 1
        entry = batch.detail_entries[0]
        assert entry.amount == 1000
        assert len(entry.addenda) == 1
        assert entry.addenda[0].payment_related_info == "INVOICE 42"
        assert document.file_control.batch_count == 1
        assert document.file_control.entry_and_addenda_count == 2

    def test_batch_control_attached_to_batch(self) -> None:
        document = assemble(minimal_file_lines())
        control = document.batches[0].batch_control
        assert control is not None
        assert control.total_credit == 1000

    def test_batch_control_is_optional(self) -> None:
        lines = [line for line in minimal_file_lines() if not line.startswith("8")]
        document = assemble(lines)
        assert document.batches[0].batch_control is None

    def test_file_without_batches(self) -> None:
        document = assemble([file_header_line(), file_control_line(batch_count=0)])
        assert document.batches == ()
        assert document.entry_count == 0

    def test_line_terminators_are_stripped(self) -> None:
        document = assemble(line + "\r\n" for line in minimal_file_lines())
        assert document.file_header.reference_code == "REF00001"
        assert document.batches[0].detail_entries[0].trace_number == "091000010000001"


class TestOrdering:
    """Entries and addenda attach to the most recent batch and entry."""

    def test_entries_keep_file_order_across_batches(self) -> None:
        document = assemble(two_batch_file_lines())
        names = [
            [entry.individual_name for entry in batch.detail_entries]
            for batch in document.batches
        ]
        assert names == [["ALICE", "BOB"], ["CAROL", "DAVE", "ERIN"]]

    def test_addenda_attach_to_most_recent_entry(self) -> None:
        lines = [
            file_header_line(),
            batch_header_line(),
            entry_line(name="FIRST"),
            addenda_line(info="A1"),
            entry_line(name="SECOND"),
            addenda_line(info="B1", sequence="0001"),
            addenda_line(info="B2", sequence="0002"),
            file_control_line(),
        ]
        entries = assemble(lines).batches[0].detail_entries
        assert [a.payment_related_info for a in entries[0].addenda] == ["A1"]
        assert [a.payment_related_info for a in entries[1].addenda] == ["B1", "B2"]

    def test_document_counts(self) -> None:
        document = assemble(two_batch_file_lines())
        assert document.entry_count == 5
        assert document.addenda_count == 0


class TestStructuralErrors:
    """Out-of-order records abort the parse with no document."""

    def test_entry_before_batch_header(self) -> None:
        lines = [file_header_line(), entry_line(), file_control_line()]
        with pytest.raises(MissingBatchHeader) as exc_info:
            assemble(lines)
        error = exc_info.value
        assert isinstance(error, StructuralError)
        assert error.kind == "MissingBatchHeader"
        assert error.context["line_number"] == 2
        assert error.context["line"] == lines[1]

    def test_entry_as_first_line(self) -> None:
        with pytest.raises(MissingBatchHeader):
            assemble([entry_line()])

    def test_batch_control_before_batch_header(self) -> None:
        with pytest.raises(MissingBatchHeader):
            assemble([file_header_line(), batch_control_line(), file_control_line()])

    def test_addendum_before_any_entry(self) -> None:
        lines = [file_header_line(), batch_header_line(), addenda_line(), file_control_line()]
        with pytest.raises(MissingDetailEntry) as exc_info:
            assemble(lines)
        assert exc_info.value.kind == "MissingDetailEntry"
        assert exc_info.value.line_number == 3

    def test_addendum_after_new_batch_header_without_entry(self) -> None:
        """A new batch resets the entry cursor."""
        lines = [
            file_header_line(),
            batch_header_line(batch_number=1),
            entry_line(),
            batch_header_line(batch_number=2),
            addenda_line(),
            file_control_line(),
        ]
        with pytest.raises(MissingDetailEntry):
            assemble(lines)

    def test_missing_file_control(self) -> None:
        with pytest.raises(MissingFileControl):
            assemble(minimal_file_lines()[:-1])

    def test_missing_file_header(self) -> None:
        with pytest.raises(MissingFileHeader):
            assemble(minimal_file_lines()[1:])


class TestDecodeErrors:
    """Mandatory-field failures are fatal and carry line diagnostics."""

    def test_malformed_amount(self) -> None:
        lines = minimal_file_lines()
        lines[2] = entry_line(amount="0000ABC000")
        with pytest.raises(FieldFormatError) as exc_info:
            assemble(lines)
        context = exc_info.value.context
        assert context["field"] == "amount"
        assert context["line_number"] == 3
        assert context["line"] == lines[2]
        assert context["record"] == "ENTRY_DETAIL"

    def test_truncated_entry(self) -> None:
        lines = minimal_file_lines()
        lines[2] = lines[2][:30]
        with pytest.raises(FieldRangeError) as exc_info:
            assemble(lines)
        assert exc_info.value.line_number == 3


class TestLenientSkipping:
    """Unknown records and blank lines are skipped without touching cursors."""

    def test_unknown_code_between_header_and_first_entry(self) -> None:
        lines = minimal_file_lines()
        lines.insert(2, "4" + " " * 93)
        document = assemble(lines)
        entry = document.batches[0].detail_entries[0]
        assert entry.amount == 1000
        assert len(entry.addenda) == 1

    def test_unknown_code_keeps_cursors(self) -> None:
        assembler = DocumentAssembler()
        for line in minimal_file_lines()[:3]:
            assembler.feed(line)
        before = (assembler.current_batch, assembler.current_entry)
        assert assembler.feed("4" + " " * 93)
        assert (assembler.current_batch, assembler.current_entry) == before

    def test_blank_lines_are_skipped(self) -> None:
        lines = minimal_file_lines()
        lines.insert(1, "")
        lines.insert(3, "   ")
        assert assemble(lines).entry_count == 1

    def test_strict_mode_rejects_unknown_codes(self) -> None:
        lines = minimal_file_lines()
        lines.insert(2, "4" + " " * 93)
        with pytest.raises(UnknownRecordType) as exc_info:
            assemble(lines, strict=True)
        assert exc_info.value.context["code"] == "4"
        assert exc_info.value.context["line_number"] == 3

    def test_strict_mode_still_skips_blank_lines(self) -> None:
        lines = minimal_file_lines()
        lines.insert(1, "")
        assert assemble(lines, strict=True).entry_count == 1


class TestTermination:
    """Parsing stops at the first file control record."""

    def test_lines_after_file_control_are_ignored(self) -> None:
        lines = minimal_file_lines() + [
            batch_header_line(batch_number=9),
            entry_line(amount=999),
            "garbage that would not decode",
        ]
        document = assemble(lines)
        assert len(document.batches) == 1
        assert document.entry_count == 1

    def test_block_filler_is_ignored(self) -> None:
        document = assemble(two_batch_file_lines())
        assert document.file_control.batch_count == 2
        assert document.file_control.total_debit == 1200

    def test_iteration_stops_at_file_control(self) -> None:
        consumed = []

        def lines():
            for line in minimal_file_lines() + [FILLER_LINE, FILLER_LINE]:
                consumed.append(line)
                yield line

        assemble(lines())
        assert len(consumed) == len(minimal_file_lines())

    def test_state_transitions(self) -> None:
        assembler = DocumentAssembler()
        assert assembler.state is AssemblerState.EXPECTING_FILE_HEADER
        assembler.feed(file_header_line())
        assert assembler.state is AssemblerState.IN_FILE
        assert assembler.feed(file_control_line()) is False
        assert assembler.state is AssemblerState.TERMINATED
        assert assembler.feed(entry_line()) is False


class TestParseEntryPoints:
    """Text and file entry points."""

    def test_parse_text(self) -> None:
        document = parse_text("\n".join(minimal_file_lines()) + "\n")
        assert document.entry_count == 1

    def test_parse_file(self, ach_file: Path) -> None:
        document = parse_file(ach_file)
        assert len(document.batches) == 2

    def test_parse_file_with_crlf(self, tmp_path: Path) -> None:
        path = tmp_path / "windows.ach"
        path.write_bytes("\r\n".join(minimal_file_lines()).encode("ascii") + b"\r\n")
        document = parse_file(path)
        assert document.batches[0].detail_entries[0].amount == 1000

    def test_parse_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReaderError) as exc_info:
            parse_file(tmp_path / "missing.ach")
        assert exc_info.value.context["file_path"].endswith("missing.ach")

    def test_parse_latin1_file(self, tmp_path: Path) -> None:
        lines = minimal_file_lines()
        lines[2] = entry_line(name="JOS\u00c9 GARC\u00cdA")
        path = tmp_path / "latin.ach"
        path.write_bytes("\n".join(lines).encode("latin-1"))

        entry = parse_file(path).batches[0].detail_entries[0]

        assert entry.individual_name == "JOS\u00c9 GARC\u00cdA"
        assert entry.trace_number == "091000010000001"

    def test_parse_text_keeps_control_characters_inside_records(self) -> None:
        lines = minimal_file_lines()
        lines[2] = entry_line(name="JOSE G\x0cARCIA")

        entry = parse_text("\r\n".join(lines)).batches[0].detail_entries[0]

        assert entry.individual_name == "JOSE G\x0cARCIA"
        assert entry.trace_number == "091000010000001"

    def test_parse_text_and_parse_file_split_alike(self, tmp_path: Path) -> None:
        text = "\r".join(minimal_file_lines()) + "\x85"
        path = tmp_path / "mac.ach"
        path.write_bytes(text.encode("latin-1"))
        assert parse_text(text) == parse_file(path)


@given(counts=batch_entry_counts())
def test_property_batches_and_entries_preserve_file_order(counts: list[int]) -> None:
    """Any sequence of batches assembles with matching per-batch entry counts."""
    document = assemble(file_with_batches(counts))
    assert [len(batch.detail_entries) for batch in document.batches] == counts
    amounts = [entry.amount for batch in document.batches for entry in batch.detail_entries]
    assert amounts == list(range(1, sum(counts) + 1))
