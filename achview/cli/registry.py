"""Writer registry for document and entry outputs.

Writers are registered by name and instantiated on demand, so the CLI can
select an output format from an argument or configuration file without
hardcoding the implementations.

Two registries exist:
    - DOCUMENT_FORMATS: full document serializers (json, yaml)
    - ENTRY_WRITERS: flattened entry table writers (csv, parquet, json)

The built-in writers are registered when this module is imported.
"""

from achview.core.protocols import Writer
from achview.core.writers import (
    CsvEntriesWriter,
    JsonDocumentWriter,
    JsonEntriesWriter,
    ParquetEntriesWriter,
    YamlDocumentWriter,
)

DOCUMENT_FORMATS: dict[str, type[Writer]] = {}
ENTRY_WRITERS: dict[str, type[Writer]] = {}


def register_document_format(name: str, cls: type[Writer]) -> None:
    """Register a full-document writer under ``name``."""
    DOCUMENT_FORMATS[name] = cls


def register_entry_writer(name: str, cls: type[Writer]) -> None:
    """Register a flattened-entry writer under ``name``."""
    ENTRY_WRITERS[name] = cls


def get_document_format(name: str) -> Writer:
    """Get a document writer instance by format name.

    Raises:
        KeyError: If the format is not registered, with message listing
                 available formats
    """
    if name not in DOCUMENT_FORMATS:
        available = ", ".join(sorted(DOCUMENT_FORMATS)) if DOCUMENT_FORMATS else "none"
        raise KeyError(f"Unknown format '{name}'. Available: {available}")
    return DOCUMENT_FORMATS[name]()


def get_entry_writer(name: str) -> Writer:
    """Get an entry writer instance by name.

    Raises:
        KeyError: If the writer is not registered, with message listing
                 available writers

    Example:
        >>> writer = get_entry_writer("csv")
        >>> writer.write(document, Path("entries.csv"))
    """
    if name not in ENTRY_WRITERS:
        available = ", ".join(sorted(ENTRY_WRITERS)) if ENTRY_WRITERS else "none"
        raise KeyError(f"Unknown writer '{name}'. Available: {available}")
    return ENTRY_WRITERS[name]()


def list_document_formats() -> dict[str, str]:
    """Map document format names to their descriptions (from docstrings)."""
    return {
        name: cls.__doc__ or "No description"
        for name, cls in sorted(DOCUMENT_FORMATS.items())
    }


def list_entry_writers() -> dict[str, str]:
    """Map entry writer names to their descriptions (from docstrings)."""
    return {
        name: cls.__doc__ or "No description"
        for name, cls in sorted(ENTRY_WRITERS.items())
    }


register_document_format("json", JsonDocumentWriter)
register_document_format("yaml", YamlDocumentWriter)
register_entry_writer("csv", CsvEntriesWriter)
register_entry_writer("parquet", ParquetEntriesWriter)
register_entry_writer("json", JsonEntriesWriter)
