"""Record-type codes of the NACHA file format.

Every line of a NACHA file starts with a single record-type code that selects
its layout. The set of kinds is closed; anything else classifies as
``RecordType.UNRECOGNIZED`` so callers can decide whether to skip it.
"""

from enum import Enum


class RecordType(Enum):
    """Kinds of records, keyed by their leading character."""

    FILE_HEADER = "1"
    BATCH_HEADER = "5"
    ENTRY_DETAIL = "6"
    ADDENDA = "7"
    BATCH_CONTROL = "8"
    FILE_CONTROL = "9"
    UNRECOGNIZED = ""

    @classmethod
    def from_code(cls, code: str) -> "RecordType":
        """Map a record-type code to its kind.

        Example:
            >>> RecordType.from_code("6")
            <RecordType.ENTRY_DETAIL: '6'>
            >>> RecordType.from_code("4")
            <RecordType.UNRECOGNIZED: ''>
        """
        if not code:
            return cls.UNRECOGNIZED
        try:
            return cls(code)
        except ValueError:
            return cls.UNRECOGNIZED

    @classmethod
    def classify(cls, line: str) -> "RecordType":
        """Classify a raw line by its leading character."""
        return cls.from_code(line[:1])
