"""Sales / paid / outstanding totals over a receipt list.

Every missing field degrades to a zero contribution; nothing here raises for
partial receipts.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import NamedTuple

from .models import AggregateResult, Receipt

_ZERO = Decimal("0")
_CENTS = Decimal("0.01")


class ReceiptAmounts(NamedTuple):
    """Per-receipt contributions to the three totals."""

    sales: Decimal
    paid: Decimal
    outstanding: Decimal


def receipt_amounts(receipt: Receipt) -> ReceiptAmounts:
    """Compute one receipt's contributions.

    ``remainingBalance`` wins whenever the key is present, and a present
    ``null`` counts as zero; otherwise the balance is the grand total less
    cash and online payments. Outstanding is floored at zero.
    """

    grand_total = receipt.grand_total if receipt.grand_total is not None else _ZERO
    paid = receipt.cash + receipt.online
    if "remaining_balance" in receipt.model_fields_set:
        remaining = receipt.remaining_balance if receipt.remaining_balance is not None else _ZERO
    else:
        remaining = grand_total - paid
    return ReceiptAmounts(sales=grand_total, paid=paid, outstanding=max(_ZERO, remaining))


def aggregate(receipts: Iterable[Receipt]) -> AggregateResult:
    """Sum sales, outstanding and paid amounts across ``receipts``."""

    total_sales = _ZERO
    total_paid = _ZERO
    total_outstanding = _ZERO
    for receipt in receipts:
        amounts = receipt_amounts(receipt)
        total_sales += amounts.sales
        total_paid += amounts.paid
        total_outstanding += amounts.outstanding
    return AggregateResult(
        total_sales=total_sales,
        total_outstanding=total_outstanding,
        total_paid=total_paid,
    )


def format_amount(value: Decimal) -> str:
    # Exactly two decimals, ASCII dot, no thousands separators. Precision grows
    # with the magnitude so large totals quantize instead of raising.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return f"{value.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}"


__all__ = ["ReceiptAmounts", "aggregate", "format_amount", "receipt_amounts"]
