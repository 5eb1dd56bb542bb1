"""Conversion of a NachaDocument into plain data for JSON/YAML output.

The plain representation mirrors the document hierarchy field for field:
dates become ISO ``YYYY-MM-DD`` strings, times become ``HH:MM`` strings and
absent dates/times become null.
"""

import json
from dataclasses import asdict
from datetime import date, time
from typing import Any

import yaml

from achview.core.model import NachaDocument


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, date):
        return value.isoformat()
    return value


def document_to_dict(document: NachaDocument) -> dict[str, Any]:
    """Convert a document to nested dicts and lists of JSON-safe scalars.

    Example:
        >>> data = document_to_dict(document)
        >>> list(data)
        ['file_header', 'batches', 'file_control']
    """
    return _plain(asdict(document))


def document_to_json(document: NachaDocument, indent: int = 2) -> str:
    return json.dumps(document_to_dict(document), indent=indent)


def document_to_yaml(document: NachaDocument) -> str:
    return yaml.safe_dump(document_to_dict(document), sort_keys=False)


SERIALIZERS = {
    "json": document_to_json,
    "yaml": document_to_yaml,
}


def serialize_document(document: NachaDocument, format: str = "json") -> str:
    """Serialize a document to text in the named format.

    Raises:
        KeyError: If the format is unknown, with message listing available formats
    """
    if format not in SERIALIZERS:
        raise KeyError(
            f"Unknown format '{format}'. Available: {', '.join(sorted(SERIALIZERS))}"
        )
    return SERIALIZERS[format](document)
