"""Parse delimited customer data into records using Polars."""

import io
from pathlib import Path
from typing import Any

import polars as pl

from personalens.errors import InputError


def load_records(csv_text: str, id_field: str = "customer_id") -> list[dict[str, Any]]:
    """Parse CSV text (header row required) into row records.

    Column types are inferred over the whole file. Rows with a null
    identifier are dropped.

    Args:
        csv_text: Delimited text with a header row
        id_field: Identifier column name

    Returns:
        List of records in file order

    Raises:
        InputError: If the text is empty or unparseable, the identifier
            column is missing, it is the only column, or no rows remain
    """
    if not csv_text or not csv_text.strip():
        raise InputError("CSV data is required.")

    try:
        df = pl.read_csv(io.StringIO(csv_text), infer_schema_length=None)
    except pl.exceptions.PolarsError as e:
        raise InputError(f"Could not parse CSV data: {e}") from e

    if id_field not in df.columns:
        raise InputError(f"CSV data must include a '{id_field}' column.")
    if len(df.columns) < 2:
        raise InputError(f"CSV data needs at least one column besides '{id_field}'.")

    df = df.filter(pl.col(id_field).is_not_null())
    if df.is_empty():
        raise InputError("No valid customer records found.")

    return df.to_dicts()


def load_records_from_path(path: Path, id_field: str = "customer_id") -> list[dict[str, Any]]:
    """Read a CSV file and parse it with ``load_records``."""
    return load_records(path.read_text(encoding="utf-8"), id_field=id_field)
