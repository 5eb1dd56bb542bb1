"""Output formatting for CLI operations.

This module provides:
- handle_error: Formatted error messages with context and optional stack traces
- render_summary: File header / file control overview of a document
- render_entries: Ordinal-numbered entry table of the flattened view
"""

import sys
import traceback
from collections.abc import Sequence

from achview.core.formatting import format_cents
from achview.core.model import NachaDocument
from achview.core.view import FlatEntry

ENTRY_COLUMNS = (
    ("Entry #", 7),
    ("TXN Code", 8),
    ("Individual Name", 22),
    ("DFI Acct #", 17),
    ("Trace #", 15),
    ("Amount", 13),
    ("Addenda?", 8),
)


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Format and display an error message with context.

    Displays the message on stderr followed by the context fields of
    AchviewError exceptions. With ``verbose``, the stack trace follows.
    """
    print(f"Error: {error}", file=sys.stderr)

    if hasattr(error, "context") and error.context:
        print("Context:", file=sys.stderr)
        for key, value in error.context.items():
            print(f"  {key}: {value}", file=sys.stderr)

    if verbose:
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)


def render_summary(document: NachaDocument) -> str:
    """Render the file header and file control of a document as text."""
    header = document.file_header
    control = document.file_control

    created_date = (
        header.file_creation_date.isoformat()
        if header.file_creation_date is not None
        else "no date provided"
    )
    created_time = (
        header.file_creation_time.strftime("%H:%M")
        if header.file_creation_time is not None
        else "no time provided"
    )

    lines = [
        "File Header",
        f"  date created        : {created_date}",
        f"  time created        : {created_time}",
        f"  origin              : {header.immediate_origin_name} ({header.immediate_origin})",
        f"  destination         : {header.immediate_destination_name} "
        f"({header.immediate_destination})",
        "",
        "File Control",
        f"  batch count         : {control.batch_count}",
        f"  block count         : {control.block_count}",
        f"  entry/addenda count : {control.entry_and_addenda_count}",
        f"  total debit         : {format_cents(control.total_debit):>16}",
        f"  total credit        : {format_cents(control.total_credit):>16}",
    ]
    return "\n".join(lines)


def render_entries(view: Sequence[FlatEntry]) -> str:
    """Render the flattened view as a fixed-width table."""
    header = "  ".join(
        f"{title:>{width}}" if title == "Amount" else f"{title:<{width}}"
        for title, width in ENTRY_COLUMNS
    )
    lines = [header.rstrip()]
    for item in view:
        entry = item.entry
        cells = (
            f"{item.ordinal:<7}",
            f"{entry.transaction_code:<8}",
            f"{entry.individual_name:<22}",
            f"{entry.dfi_account_number:<17}",
            f"{entry.trace_number:<15}",
            f"{format_cents(entry.amount):>13}",
            f"{'yes' if entry.has_addenda else '':^8}",
        )
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)
