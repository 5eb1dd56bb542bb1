"""Flattened, ordinal-numbered view over a completed document.

The flattened view walks batches in file order and entries in batch order,
numbering each detail entry from 1. Ordinals are contiguous across batch
boundaries. The view is derived on demand and never mutates the document.

This module also holds the browsing selection state: a cursor over the
flattened view whose transitions are pure functions, so an interactive
front end only has to map key presses to them and render.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

from achview.core.model import DetailEntry, NachaDocument

JUMP_STEP = 10


class FlatEntry(NamedTuple):
    """A detail entry paired with its 1-based position in the file."""

    ordinal: int
    entry: DetailEntry


def flatten_entries(document: NachaDocument) -> list[FlatEntry]:
    """Number every detail entry of a document in traversal order.

    Args:
        document: A completed NachaDocument

    Returns:
        List of (ordinal, entry) pairs, ordinals 1..N

    Example:
        >>> view = flatten_entries(document)
        >>> [item.ordinal for item in view]
        [1, 2, 3, 4, 5]
    """
    entries = (entry for batch in document.batches for entry in batch.detail_entries)
    return [FlatEntry(ordinal, entry) for ordinal, entry in enumerate(entries, start=1)]


@dataclass(frozen=True)
class Selection:
    """Cursor into a flattened view of ``length`` entries.

    ``index`` is zero-based and None when the view is empty. Stepping past
    either end wraps around; jumping clamps to the first or last entry.
    """

    length: int
    index: int | None = None

    @classmethod
    def start(cls, length: int) -> "Selection":
        return cls(length=length, index=0 if length > 0 else None)

    def next(self) -> "Selection":
        if self.index is None:
            return self
        return Selection(self.length, (self.index + 1) % self.length)

    def previous(self) -> "Selection":
        if self.index is None:
            return self
        return Selection(self.length, (self.index - 1) % self.length)

    def jump_next(self, step: int = JUMP_STEP) -> "Selection":
        if self.index is None:
            return self
        return Selection(self.length, min(self.index + step, self.length - 1))

    def jump_previous(self, step: int = JUMP_STEP) -> "Selection":
        if self.index is None:
            return self
        return Selection(self.length, max(self.index - step, 0))

    def selected(self, view: Sequence[FlatEntry]) -> FlatEntry | None:
        """Return the selected item of ``view``, or None if nothing is selected."""
        if self.index is None:
            return None
        return view[self.index]


_KEY_ACTIONS = {
    "j": Selection.next,
    "down": Selection.next,
    "k": Selection.previous,
    "up": Selection.previous,
    "l": Selection.jump_next,
    "right": Selection.jump_next,
    "h": Selection.jump_previous,
    "left": Selection.jump_previous,
}


def apply_key(selection: Selection, key: str) -> Selection:
    """Apply a key press to a selection; unbound keys leave it unchanged."""
    action = _KEY_ACTIONS.get(key.lower())
    if action is None:
        return selection
    return action(selection)
