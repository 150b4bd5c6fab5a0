"""CSV text → row dictionaries.

Parsing follows RFC 4180 rules via the stdlib :mod:`csv` module: ``,``
delimiter, ``"`` quoting with doubled quotes as the escape, and quoted cells
that may contain delimiters and newlines. Blank lines are skipped.
"""

from __future__ import annotations

import csv
from collections.abc import Sequence
from io import StringIO

from ..logging_setup import get_logger

type Row = dict[str, str]
"""One data line of the export, keyed by column name."""

_logger = get_logger("receipt_report.ingest.csv_rows")


def unique_headers(names: Sequence[str]) -> list[str]:
    """Rename repeated header names so every column keeps its own key.

    The first occurrence keeps its name; later ones get ``_1``, ``_2``, ...
    appended (``Receipt, Receipt`` → ``Receipt, Receipt_1``), skipping any
    suffix that is already taken by another column.
    """

    taken = set(names)
    seen: set[str] = set()
    counts: dict[str, int] = {}
    out: list[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            out.append(name)
            continue
        n = counts.get(name, 0)
        while True:
            n += 1
            candidate = f"{name}_{n}"
            if candidate not in taken:
                break
        counts[name] = n
        taken.add(candidate)
        seen.add(candidate)
        out.append(candidate)
    return out


def parse_csv_rows(csv_text: str, *, header: bool = True) -> list[Row]:
    """Split ``csv_text`` into rows.

    With ``header=True`` the first line names the columns (repeated names are
    made unique with :func:`unique_headers`); otherwise columns are named by
    their 0-based position (``"0"``, ``"1"``, ...). Cells beyond the header
    are dropped and missing cells read as ``""``.

    Text without data rows yields ``[]``. A structurally unreadable text
    raises a single ``csv.Error``.
    """

    rows: list[Row] = []
    with StringIO(csv_text) as f:
        try:
            reader = csv.reader(f)
            names: list[str] | None = None
            if header:
                raw = next(reader, [])
                names = unique_headers(raw)
                renamed = [new for old, new in zip(raw, names, strict=True) if old != new]
                if renamed:
                    _logger.warning(
                        "parse_csv_rows:duplicate_headers renamed=%s", ",".join(renamed)
                    )
            for cells in reader:
                if not cells:
                    continue
                if names is None:
                    rows.append({str(i): cell for i, cell in enumerate(cells)})
                else:
                    padded = cells + [""] * (len(names) - len(cells))
                    rows.append(dict(zip(names, padded, strict=False)))
        except csv.Error as exc:
            raise csv.Error(
                f"receipts CSV could not be parsed near row {len(rows) + 1}: {exc}"
            ) from exc
    return rows


__all__ = ["Row", "parse_csv_rows", "unique_headers"]
