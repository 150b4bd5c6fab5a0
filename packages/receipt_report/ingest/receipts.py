"""Flatten per-customer CSV rows into a single receipt list.

Each row of the export holds one ``CUSTOMER`` column followed by any number
of receipt columns; every receipt cell is a JSON document, sometimes wrapped
in an extra layer of CSV quoting. Decoding is two-stage (cell text → JSON →
validated :class:`~receipt_report.models.Receipt`) and a cell that fails
either stage is logged and skipped. Extraction as a whole never fails.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from ..logging_setup import get_logger
from ..models import Receipt
from .csv_rows import parse_csv_rows

IDENTIFIER_COLUMN = "CUSTOMER"

_logger = get_logger("receipt_report.ingest.receipts")


def is_identifier_column(name: str) -> bool:
    return name.upper() == IDENTIFIER_COLUMN


def ordered_columns(names: Iterable[str]) -> list[str]:
    """Order a row's columns: identifier first, the rest lexically.

    Names compare case-insensitively, with the raw name as a tie-breaker so
    the order is total.
    """

    return sorted(names, key=lambda n: (not is_identifier_column(n), n.casefold(), n))


def _unwrap_quotes(text: str) -> str:
    if text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


def _receipt_from_json(text: str) -> Receipt:
    # Decimal keeps amounts such as 99.99 exact through summation.
    try:
        payload = json.loads(text, parse_float=Decimal)
    except RecursionError:
        raise ValueError("receipt cell nests JSON too deeply to decode") from None
    if not isinstance(payload, dict):
        raise ValueError(f"receipt cell holds a JSON {type(payload).__name__}, not an object")
    return Receipt.model_validate(payload)


def decode_receipt_cell(raw: str) -> Receipt:
    """Decode one receipt cell.

    The cell is trimmed, one pair of surrounding double quotes is removed and
    doubled quotes left over from a second round of CSV escaping are collapsed
    before JSON decoding. When collapsing breaks a document that was valid
    without it (a JSON empty string ``""`` reads as a doubled quote), the
    uncollapsed text is tried once. If that retry decodes as JSON but is not a
    valid receipt, its error is the one raised.

    Raises ``ValueError`` (including ``json.JSONDecodeError`` and pydantic's
    ``ValidationError``) when the cell does not hold a receipt.
    """

    unwrapped = _unwrap_quotes(raw.strip())
    unescaped = unwrapped.replace('""', '"')
    try:
        return _receipt_from_json(unescaped)
    except ValueError as first_error:
        if unescaped == unwrapped:
            raise
        try:
            return _receipt_from_json(unwrapped)
        except json.JSONDecodeError:
            raise first_error from None


def extract_receipts(rows: Iterable[Mapping[str, Any]]) -> list[Receipt]:
    """Decode every non-identifier, non-blank cell into a flat receipt list.

    Output order is row order, then :func:`ordered_columns` order within a
    row. Cells that already hold a mapping are validated directly.
    """

    receipts: list[Receipt] = []
    skipped = 0
    for row_idx, row in enumerate(rows):
        for column in ordered_columns(row.keys()):
            if is_identifier_column(column):
                continue
            value = row.get(column)
            if value is None:
                continue
            try:
                if isinstance(value, Mapping):
                    receipts.append(Receipt.model_validate(dict(value)))
                    continue
                text = str(value)
                if not text.strip():
                    continue
                receipts.append(decode_receipt_cell(text))
            except ValueError as e:
                skipped += 1
                _logger.warning(
                    "extract_receipts:cell_skipped row=%d column=%s error=%s detail=%s",
                    row_idx,
                    column,
                    e.__class__.__name__,
                    str(e).splitlines()[0] if str(e) else "",
                )

    _logger.info("extract_receipts:done receipts=%d skipped=%d", len(receipts), skipped)
    return receipts


def extract_receipts_from_text(csv_text: str) -> list[Receipt]:
    """Parse raw export text and extract its receipts.

    Text without data rows yields ``[]``. ``csv.Error`` from a structurally
    unreadable export propagates unchanged.
    """

    return extract_receipts(parse_csv_rows(csv_text))


__all__ = [
    "IDENTIFIER_COLUMN",
    "decode_receipt_cell",
    "extract_receipts",
    "extract_receipts_from_text",
    "is_identifier_column",
    "ordered_columns",
]
