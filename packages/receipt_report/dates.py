"""Receipt date normalization.

Receipt dates are mostly written as ``DD/MM/YYYY`` but the export also carries
the occasional ISO or free-form string. :func:`normalize_date` tries the
slash form first and falls back to ``dateutil``'s general parser. Either path
yields a plain :class:`datetime.date`, or ``None`` when the text cannot be
read as a date.
"""

from __future__ import annotations

import datetime as dt
import re

from dateutil import parser as dtparser

# Leading integer of a date part: optional whitespace and sign, then digits.
# Anything after the digits is ignored ("2024 " and "05th" both read).
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(part: str) -> int | None:
    m = _LEADING_INT_RE.match(part)
    return int(m.group(1)) if m else None


def calendar_date(year: int, month: int, day: int) -> dt.date | None:
    """Build a date from possibly out-of-range components.

    ``month`` is 1-based. Overflowing components roll forward or back the way
    a calendar would: ``(2024, 13, 1)`` is 2025-01-01, ``(2024, 1, 32)`` is
    2024-02-01 and ``(2024, 3, 0)`` is 2024-02-29. Returns ``None`` when the
    result falls outside the range :class:`datetime.date` can represent.
    """

    y, m0 = divmod(year * 12 + (month - 1), 12)
    try:
        return dt.date(y, m0 + 1, 1) + dt.timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def normalize_date(value: str | None) -> dt.date | None:
    """Parse a receipt date string; ``None`` means unparseable."""

    if value is None or not value.strip():
        return None

    parts = value.split("/")
    if len(parts) == 3:
        day, month, year = (_leading_int(p) for p in parts)
        if day is None or month is None or year is None:
            return None
        if 0 <= year <= 99:
            # Two-digit years belong to the 1900s: "05/03/24" is 1924-03-05.
            year += 1900
        return calendar_date(year, month, day)

    try:
        return dtparser.parse(value.strip()).date()
    except (ValueError, OverflowError):
        return None


def same_day(a: dt.date, b: dt.date) -> bool:
    """Calendar-day equality (year, month and day)."""

    return a.year == b.year and a.month == b.month and a.day == b.day


__all__ = ["calendar_date", "normalize_date", "same_day"]
