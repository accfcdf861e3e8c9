"""Receipt amount computation.

All money is handled as :class:`~decimal.Decimal` and rounded half-up to
cents, the same policy used for line totals and discounts.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

CENTS = Decimal("0.01")
DEFAULT_TAX_RATE = Decimal("0.12")


def to_money(value: object) -> Decimal:
    """Return ``value`` as a Decimal rounded to cents."""

    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ReceiptAmounts:
    """Subtotal, tax and total for a receipt."""

    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal


def compute_receipt(
    subtotal: object, tax_rate: object = DEFAULT_TAX_RATE
) -> ReceiptAmounts:
    """Return tax and total for ``subtotal`` at ``tax_rate``.

    >>> compute_receipt("1000.00").total
    Decimal('1120.00')
    """

    base = to_money(subtotal)
    rate = Decimal(str(tax_rate))
    if base < 0:
        raise ValueError("subtotal must be non-negative")
    tax = to_money(base * rate)
    return ReceiptAmounts(subtotal=base, tax_rate=rate, tax_amount=tax, total=base + tax)


def line_total(unit_price: object, quantity: int) -> Decimal:
    return to_money(Decimal(str(unit_price)) * quantity)


def lines_subtotal(lines: Iterable[Mapping[str, object]]) -> Decimal:
    """Sum ``unit_price * quantity`` over booking lines."""

    total = Decimal("0")
    for line in lines:
        total += line_total(line.get("unit_price") or 0, int(line.get("quantity") or 0))
    return to_money(total)


def apply_percent_discount(amount: Decimal, percent: int | None) -> Decimal:
    """Return the discount for ``percent`` of ``amount``."""

    if not percent:
        return Decimal("0.00")
    return to_money(amount * Decimal(percent) / Decimal("100"))
