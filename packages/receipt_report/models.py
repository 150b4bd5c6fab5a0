"""Data models for ``receipt_report``.

Receipts arrive as JSON documents embedded in CSV cells. The shape is loose:
only a handful of fields are interpreted here and every other key is carried
through untouched. Amounts are ``Decimal`` so totals print exactly.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Receipt records
# ---------------------------------------------------------------------------


class Payments(BaseModel):
    """Payment split recorded on a receipt. Missing parts count as zero."""

    model_config = ConfigDict(frozen=True, extra="allow")

    cash: Decimal | None = None
    online: Decimal | None = None


class Receipt(BaseModel):
    """A single sale/payment record decoded from one CSV cell.

    ``grand_total`` and ``remaining_balance`` are exposed under snake_case
    names but validated from the camelCase keys used in the export
    (``grandTotal`` / ``remainingBalance``). Keys not declared here are kept in
    :attr:`model_extra`. Instances are frozen once validated.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    date: str | None = None
    grand_total: Decimal | None = Field(default=None, alias="grandTotal")
    payments: Payments | None = None
    remaining_balance: Decimal | None = Field(default=None, alias="remainingBalance")

    @field_validator("date", mode="before")
    @classmethod
    def _date_as_text(cls, v: Any) -> Any:
        # Some exports write bare numbers (e.g. a year) into the date field.
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def cash(self) -> Decimal:
        if self.payments is None or self.payments.cash is None:
            return Decimal("0")
        return self.payments.cash

    @property
    def online(self) -> Decimal:
        if self.payments is None or self.payments.online is None:
            return Decimal("0")
        return self.payments.online


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AllFilter:
    """Match every receipt, dated or not."""

    kind: ClassVar[str] = "all"

    @property
    def label(self) -> str:
        return "all"


@dataclass(frozen=True, slots=True)
class DayFilter:
    """Match receipts dated on one calendar day."""

    kind: ClassVar[str] = "day"

    day: dt.date

    @property
    def label(self) -> str:
        return f"day {self.day.isoformat()}"


@dataclass(frozen=True, slots=True)
class MonthFilter:
    """Match receipts dated within one calendar month (``month`` is 1-12)."""

    kind: ClassVar[str] = "month"

    year: int
    month: int

    def __post_init__(self) -> None:
        if isinstance(self.month, bool) or not isinstance(self.month, int):
            raise ValueError("MonthFilter.month must be an integer")
        if not 1 <= self.month <= 12:
            raise ValueError(f"MonthFilter.month must be within 1..12, got {self.month}")

    @property
    def label(self) -> str:
        return f"month {self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, slots=True)
class YearFilter:
    """Match receipts dated within one calendar year."""

    kind: ClassVar[str] = "year"

    year: int

    @property
    def label(self) -> str:
        return f"year {self.year}"


type FilterSpec = AllFilter | DayFilter | MonthFilter | YearFilter
"""Caller-supplied selection criterion; exactly one variant is active."""


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AggregateResult:
    """Totals over a receipt list.

    ``total_outstanding`` sums per-receipt outstanding amounts after each one
    is floored at zero, so overpayments never reduce it.
    """

    total_sales: Decimal
    total_outstanding: Decimal
    total_paid: Decimal


__all__ = [
    "AggregateResult",
    "AllFilter",
    "DayFilter",
    "FilterSpec",
    "MonthFilter",
    "Payments",
    "Receipt",
    "YearFilter",
]
