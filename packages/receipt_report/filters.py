"""Date-based receipt filtering.

Filters never fail: receipts with a missing or unreadable ``date`` simply do
not match a day/month/year filter (they still count under :class:`AllFilter`).
Filter targets are built from unambiguous inputs (ISO ``YYYY-MM-DD`` for a
day, ``YYYY-MM`` for a month, an integer year) so they cannot be misread the
way a free-form day/month string could.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Iterable

from .dates import normalize_date, same_day
from .models import AllFilter, DayFilter, FilterSpec, MonthFilter, Receipt, YearFilter

_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")

# Prompts shown when a non-"all" filter is applied without a value.
_MISSING_VALUE_MESSAGES: dict[str, str] = {
    "day": "Please select a day",
    "month": "Please select a month",
    "year": "Please enter a year",
}


def parse_filter_spec(kind: str, value: str | None = None) -> FilterSpec:
    """Build a :data:`FilterSpec` from a filter kind and its textual value.

    ``kind`` is one of ``all``, ``day``, ``month`` or ``year``
    (case-insensitive). ``value`` is ignored for ``all``. Raises
    ``ValueError`` for an unknown kind, a missing value, or a value in the
    wrong format.
    """

    k = (kind or "").strip().lower()
    if k == "all":
        return AllFilter()
    if k not in _MISSING_VALUE_MESSAGES:
        raise ValueError(f"unknown filter type: {kind!r} (expected all, day, month or year)")

    raw = (value or "").strip()
    if not raw:
        raise ValueError(_MISSING_VALUE_MESSAGES[k])

    if k == "day":
        try:
            return DayFilter(day=dt.date.fromisoformat(raw))
        except ValueError as exc:
            raise ValueError(f"invalid day {value!r}: expected YYYY-MM-DD") from exc

    if k == "month":
        m = _MONTH_RE.match(raw)
        if not m:
            raise ValueError(f"invalid month {value!r}: expected YYYY-MM")
        return MonthFilter(year=int(m.group(1)), month=int(m.group(2)))

    try:
        return YearFilter(year=int(raw))
    except ValueError as exc:
        raise ValueError(f"invalid year {value!r}: expected an integer") from exc


def matches(receipt: Receipt, spec: FilterSpec) -> bool:
    """Return whether ``receipt`` is selected by ``spec``."""

    if isinstance(spec, AllFilter):
        return True

    when = normalize_date(receipt.date)
    if when is None:
        return False

    if isinstance(spec, DayFilter):
        return same_day(when, spec.day)
    if isinstance(spec, MonthFilter):
        return when.year == spec.year and when.month == spec.month
    if isinstance(spec, YearFilter):
        return when.year == spec.year
    raise TypeError(f"unsupported filter spec: {spec!r}")


def filter_receipts(receipts: Iterable[Receipt], spec: FilterSpec) -> list[Receipt]:
    """Return the receipts selected by ``spec``, preserving input order.

    The result is always a new list; with :class:`AllFilter` it is a copy of
    the input.
    """

    if isinstance(spec, AllFilter):
        return list(receipts)
    return [r for r in receipts if matches(r, spec)]


__all__ = ["filter_receipts", "matches", "parse_filter_spec"]
