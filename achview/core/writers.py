"""Built-in writers for documents and flattened entry tables.

Document writers serialize the full hierarchy; entry writers export the
ordinal-numbered entry view through Polars.
"""

import logging
from pathlib import Path
from typing import Any

import polars as pl

from achview.core.exceptions import WriterError
from achview.core.model import NachaDocument
from achview.core.schema import entries_frame, validate_entries_frame
from achview.core.serialize import document_to_json, document_to_yaml

logger = logging.getLogger(__name__)


def _write_text(text: str, path: Path, format: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise WriterError(
            f"Cannot write {format} output: {e}",
            output_path=str(path),
            format=format,
            reason=type(e).__name__,
        ) from e


class JsonDocumentWriter:
    """Full document hierarchy as pretty-printed JSON."""

    def write(self, document: NachaDocument, path: Path, **config: Any) -> None:
        indent = config.get("indent", 2)
        _write_text(document_to_json(document, indent=indent) + "\n", path, "json")


class YamlDocumentWriter:
    """Full document hierarchy as YAML."""

    def write(self, document: NachaDocument, path: Path, **config: Any) -> None:
        _write_text(document_to_yaml(document), path, "yaml")


class _EntriesWriter:
    format = ""

    def write(self, document: NachaDocument, path: Path, **config: Any) -> None:
        df = validate_entries_frame(entries_frame(document))
        logger.debug("Writing %d entries to %s as %s", len(df), path, self.format)
        try:
            self._write_frame(df, path, **config)
        except OSError as e:
            raise WriterError(
                f"Cannot write {self.format} output: {e}",
                output_path=str(path),
                format=self.format,
                reason=type(e).__name__,
            ) from e

    def _write_frame(self, df: pl.DataFrame, path: Path, **config: Any) -> None:
        raise NotImplementedError


class CsvEntriesWriter(_EntriesWriter):
    """Flattened entries as CSV."""

    format = "csv"

    def _write_frame(self, df: pl.DataFrame, path: Path, **config: Any) -> None:
        df.write_csv(path, separator=config.get("delimiter", ","))


class ParquetEntriesWriter(_EntriesWriter):
    """Flattened entries as Parquet."""

    format = "parquet"

    def _write_frame(self, df: pl.DataFrame, path: Path, **config: Any) -> None:
        df.write_parquet(path, compression=config.get("compression", "zstd"))


class JsonEntriesWriter(_EntriesWriter):
    """Flattened entries as a JSON array of rows."""

    format = "json"

    def _write_frame(self, df: pl.DataFrame, path: Path, **config: Any) -> None:
        df.write_json(path)
