"""Protocol definitions for output writers.

A writer serializes a completed NachaDocument to a file. Two families exist:

    - document writers serialize the whole hierarchy (JSON, YAML)
    - entry writers export the flattened entry view as a table (CSV,
      Parquet, JSON)

Both share the same interface. Implementations must never mutate the
document and must raise WriterError with the output path on failure.
"""

from pathlib import Path
from typing import Any, Protocol

from achview.core.model import NachaDocument


class Writer(Protocol):
    """Protocol for document and entry writers.

    Example:
        >>> class YamlDocumentWriter:
        ...     def write(self, document: NachaDocument, path: Path, **config: Any) -> None:
        ...         path.write_text(document_to_yaml(document))
        ...
        >>> YamlDocumentWriter().write(document, Path("file.yaml"))
    """

    def write(self, document: NachaDocument, path: Path, **config: Any) -> None:
        """Write a document to a file.

        Args:
            document: Completed document to serialize
            path: Path to the output file to create
            **config: Format-specific configuration options

        Raises:
            WriterError: If writing fails. The error should include the
                        output path and the specific failure.
        """
        ...
