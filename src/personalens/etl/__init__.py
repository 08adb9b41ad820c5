"""Loading customer data into pipeline records using Polars."""

from personalens.etl.csv_loader import load_records, load_records_from_path

__all__ = ["load_records", "load_records_from_path"]
