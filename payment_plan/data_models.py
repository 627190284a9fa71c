"""Data models for the payment plan calculator.

This module defines dataclasses for the values that flow through the
calculator: the input snapshot assembled from user selections, the rows of
the payment schedule, the chart breakdown, the computed plan and the
formatted document handed to the exporter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import List, Mapping, Optional


@dataclass(frozen=True)
class PlanInput:
    """Snapshot of the inputs for a single calculation.

    Attributes
    ----------
    price: Decimal
        Catalog price of the chosen unit.
    down_payment_percent: int
        Down payment as a whole percentage of ``price`` (25 to 100).
    term_months: int
        Repayment term; one of ``config.TERMS``.
    interim_payments: Mapping[int, Decimal]
        Extra payments keyed by month number (1..term). Months that are
        absent pay no interim amount. The mapping is copied and frozen on
        construction so a snapshot cannot change under a running calculation.
    """

    price: Decimal
    down_payment_percent: int
    term_months: int
    interim_payments: Mapping[int, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = MappingProxyType(
            {int(month): Decimal(amount) for month, amount in dict(self.interim_payments).items()}
        )
        object.__setattr__(self, "price", Decimal(self.price))
        object.__setattr__(self, "interim_payments", frozen)

    def interim_for(self, month: int) -> Decimal:
        return self.interim_payments.get(month, Decimal("0"))


@dataclass
class PaymentRow:
    """One line of the payment schedule.

    Month 0 is the down payment; months 1..term are installments. ``balance``
    is the amount still owed after this row and is never negative.
    """

    month: int
    description: str
    payment: Decimal
    balance: Decimal


@dataclass
class ChartData:
    """Breakdown of the total payment drawn by the chart renderer."""

    down_payment: Decimal
    interim_payments: Decimal
    monthly_payments: Decimal

    @property
    def total(self) -> Decimal:
        return self.down_payment + self.interim_payments + self.monthly_payments

    @property
    def has_data(self) -> bool:
        return self.down_payment > 0 or self.interim_payments > 0 or self.monthly_payments > 0


@dataclass
class PaymentPlan:
    """Result of a calculation.

    ``interim_error`` is set when the interim payments exceed the principal
    left to finance; the remaining figures are still computed in that case
    but should be treated as an estimate only.
    """

    down_payment_amount: Decimal
    principal: Decimal
    total_interim_payments: Decimal
    average_term_months: Decimal
    total_interest: Decimal
    monthly_payment: Decimal
    total_payment: Decimal
    schedule: List[PaymentRow]
    interest_info: str
    chart_data: ChartData
    monthly_principal_portion: Optional[Decimal] = None
    interim_error: Optional[str] = None


@dataclass
class DocumentRow:
    month: str
    description: str
    payment: str
    balance: str


@dataclass
class PlanDocument:
    """Display-ready view of a plan for the document exporter.

    Every monetary value is already a formatted string. ``chart_image``
    holds the rendered chart as PNG bytes.
    """

    customer_name: str
    apartment_details: str
    apartment_type: str
    apartment_price: str
    total_payment: str
    monthly_payment: str
    down_payment_amount: str
    down_payment_percent: str
    term: str
    interest_info: str
    total_interim_payments: str
    total_interest: str
    chart_image: Optional[bytes]
    schedule: List[DocumentRow]
    interim_error: Optional[str] = None
