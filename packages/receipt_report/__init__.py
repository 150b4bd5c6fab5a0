"""Public interface for the ``receipt_report`` package.

This module exposes the package's pipeline functions and public models/types
as the stable import surface. There is no runtime logic here, only symbol
re-exports.
"""

from .aggregate import ReceiptAmounts, aggregate, format_amount, receipt_amounts
from .dates import calendar_date, normalize_date, same_day
from .filters import filter_receipts, matches, parse_filter_spec
from .ingest import (
    EmptySourceError,
    SourceFetchError,
    decode_receipt_cell,
    extract_receipts,
    extract_receipts_from_text,
    fetch_csv_text,
    load_csv_text,
    parse_csv_rows,
    read_csv_text,
)
from .models import (
    AggregateResult,
    AllFilter,
    DayFilter,
    FilterSpec,
    MonthFilter,
    Payments,
    Receipt,
    YearFilter,
)
from .relay import delete_receipt
from .session import ReportSession

__all__ = [
    # Pipeline
    "parse_csv_rows",
    "decode_receipt_cell",
    "extract_receipts",
    "extract_receipts_from_text",
    "normalize_date",
    "calendar_date",
    "same_day",
    "parse_filter_spec",
    "filter_receipts",
    "matches",
    "aggregate",
    "receipt_amounts",
    "format_amount",
    "ReportSession",
    # Collaborators
    "fetch_csv_text",
    "read_csv_text",
    "load_csv_text",
    "delete_receipt",
    # Models / types
    "Receipt",
    "Payments",
    "FilterSpec",
    "AllFilter",
    "DayFilter",
    "MonthFilter",
    "YearFilter",
    "AggregateResult",
    "ReceiptAmounts",
    # Errors
    "EmptySourceError",
    "SourceFetchError",
]
