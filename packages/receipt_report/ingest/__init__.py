"""Ingest helpers: export retrieval, CSV row parsing and receipt extraction."""

from .csv_rows import Row, parse_csv_rows, unique_headers
from .receipts import (
    IDENTIFIER_COLUMN,
    decode_receipt_cell,
    extract_receipts,
    extract_receipts_from_text,
    ordered_columns,
)
from .source import (
    EmptySourceError,
    SourceFetchError,
    fetch_csv_text,
    load_csv_text,
    read_csv_text,
)

__all__ = [
    "IDENTIFIER_COLUMN",
    "EmptySourceError",
    "Row",
    "SourceFetchError",
    "decode_receipt_cell",
    "extract_receipts",
    "extract_receipts_from_text",
    "fetch_csv_text",
    "load_csv_text",
    "ordered_columns",
    "parse_csv_rows",
    "read_csv_text",
    "unique_headers",
]
