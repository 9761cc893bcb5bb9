"""Domain service: Invoice Calculator.

A pure function over a job's part and labor lines.  It never reads or
writes storage, so the same lines and discount flag always produce the
same totals.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from jobcard.domain.exceptions import ValidationError
from jobcard.domain.model.job import LaborItem, PartUsage
from jobcard.domain.model.value_objects import Money

DEFAULT_DISCOUNT_RATE = Decimal("0.05")


@dataclass(frozen=True)
class InvoiceTotals:
    parts_total: Money
    labor_total: Money
    subtotal: Money
    discount: Money
    final_cost: Money


def calculate_invoice(
    parts: Iterable[PartUsage],
    labor: Iterable[LaborItem],
    discount_eligible: bool,
    discount_rate: Decimal = DEFAULT_DISCOUNT_RATE,
    currency: str = "USD",
) -> InvoiceTotals:
    """Compute subtotal and final cost for a set of job lines.

    ``final_cost`` is ``subtotal * (1 - discount_rate)`` when the job is
    discount eligible, otherwise ``subtotal``, rounded half-up to cents.
    """
    if not Decimal("0") <= discount_rate <= Decimal("1"):
        raise ValidationError(f"Discount rate must be between 0 and 1, got {discount_rate}")

    parts_total = Money.zero(currency)
    for part in parts:
        parts_total = parts_total + part.line_total

    labor_total = Money.zero(currency)
    for item in labor:
        labor_total = labor_total + item.cost

    subtotal = parts_total + labor_total

    if discount_eligible:
        final_cost = subtotal.scaled(Decimal("1") - discount_rate).rounded()
    else:
        final_cost = subtotal.rounded()

    return InvoiceTotals(
        parts_total=parts_total.rounded(),
        labor_total=labor_total.rounded(),
        subtotal=subtotal.rounded(),
        discount=subtotal.rounded() - final_cost,
        final_cost=final_cost,
    )
