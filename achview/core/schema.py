"""Tabular export schema for the flattened entry view.

The flattened view is exported as a Polars DataFrame with a fixed schema so
that every writer (CSV, Parquet, JSON) produces the same columns.

Schema:
    - ordinal (UInt32): 1-based position of the entry in the file
    - transaction_code (Utf8): Two-digit NACHA transaction code
    - direction (Utf8): "credit", "debit" or "unknown"
    - individual_name (Utf8): Receiver name
    - dfi_account_number (Utf8): Receiver account number
    - receiving_dfi_id (Utf8): Receiving bank routing identifier
    - trace_number (Utf8): Entry trace number
    - amount_cents (UInt64): Amount in cents
    - addenda_count (UInt32): Number of addenda attached to the entry
"""

import polars as pl
from polars.datatypes.classes import DataTypeClass

from achview.core.exceptions import ValidationError
from achview.core.model import NachaDocument
from achview.core.view import flatten_entries

ENTRY_SCHEMA = {
    "ordinal": pl.UInt32,
    "transaction_code": pl.Utf8,
    "direction": pl.Utf8,
    "individual_name": pl.Utf8,
    "dfi_account_number": pl.Utf8,
    "receiving_dfi_id": pl.Utf8,
    "trace_number": pl.Utf8,
    "amount_cents": pl.UInt64,
    "addenda_count": pl.UInt32,
}


def create_empty_entries() -> pl.DataFrame:
    """Create an empty entry frame with the correct schema."""
    return pl.DataFrame(schema=ENTRY_SCHEMA)


def get_entry_schema() -> dict[str, DataTypeClass]:
    """Return a copy of the entry schema definition."""
    return ENTRY_SCHEMA.copy()


def entries_frame(document: NachaDocument) -> pl.DataFrame:
    """Build the export frame for a document's flattened view.

    Args:
        document: A completed NachaDocument

    Returns:
        DataFrame with one row per detail entry, ordered by ordinal

    Example:
        >>> df = entries_frame(document)
        >>> df["ordinal"].to_list()
        [1, 2, 3]
    """
    rows = [
        {
            "ordinal": item.ordinal,
            "transaction_code": item.entry.transaction_code,
            "direction": item.entry.direction,
            "individual_name": item.entry.individual_name,
            "dfi_account_number": item.entry.dfi_account_number,
            "receiving_dfi_id": item.entry.receiving_dfi_id,
            "trace_number": item.entry.trace_number,
            "amount_cents": item.entry.amount,
            "addenda_count": len(item.entry.addenda),
        }
        for item in flatten_entries(document)
    ]
    if not rows:
        return create_empty_entries()
    return pl.DataFrame(rows, schema=ENTRY_SCHEMA)


def validate_entries_frame(df: pl.DataFrame) -> pl.DataFrame:
    """Validate that a DataFrame conforms to the entry schema.

    This function verifies:
    1. All schema columns are present
    2. No unexpected columns are present
    3. Every column has the expected data type

    Args:
        df: DataFrame to validate

    Returns:
        The validated DataFrame unchanged (same reference)

    Raises:
        ValidationError: If validation fails with details about the violation
    """
    df_columns = set(df.columns)
    missing_fields = set(ENTRY_SCHEMA) - df_columns

    if missing_fields:
        raise ValidationError(
            f"Missing required fields: {sorted(missing_fields)}",
            missing_fields=sorted(missing_fields),
        )

    unexpected_fields = df_columns - set(ENTRY_SCHEMA)
    if unexpected_fields:
        raise ValidationError(
            f"Unexpected fields not in entry schema: {sorted(unexpected_fields)}",
            unexpected_fields=sorted(unexpected_fields),
        )

    for field_name, expected_type in ENTRY_SCHEMA.items():
        actual_type = df.schema[field_name]
        if actual_type.base_type() != expected_type:
            raise ValidationError(
                f"Field '{field_name}' has incorrect type",
                field=field_name,
                expected_type=str(expected_type),
                actual_type=str(actual_type),
            )

    return df
