"""Mutable user selections that feed the calculator.

``PlanForm`` plays the part of the input form: it keeps the current
apartment, term, down payment percentage and interim payments, enforces the
reset rules, and hands an immutable ``PlanInput`` snapshot to the engine on
every recalculation.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional

from .config import (
    APARTMENT_OPTIONS,
    INTERIM_PAYMENT_INTERVAL,
    MAX_DOWN_PAYMENT_PERCENT,
    MIN_DOWN_PAYMENT_PERCENT,
    TERMS,
    ApartmentOption,
    get_apartment,
)
from .data_models import PaymentPlan, PlanInput
from .engine import compute_plan
from .utils import digits_only_amount

CUSTOM_APARTMENT_ID = "custom"


class PlanForm:
    """Current selections of a buyer.

    Changing the term or choosing a full cash payment (100 %) clears the
    interim payments, since they are keyed by month and only make sense
    against a financed balance.
    """

    def __init__(
        self,
        apartment_id: str = APARTMENT_OPTIONS[0].id,
        term_months: int = 24,
        down_payment_percent: int = MIN_DOWN_PAYMENT_PERCENT,
    ) -> None:
        self.customer_name = ""
        self.apartment_details = ""
        self._apartment = get_apartment(apartment_id)
        self._interim_payments: Dict[int, Decimal] = {}
        self.term_months = term_months
        self.down_payment_percent = down_payment_percent

    @property
    def apartment(self) -> ApartmentOption:
        return self._apartment

    def select_apartment(self, apartment_id: str) -> None:
        self._apartment = get_apartment(apartment_id)

    def select_custom_price(self, price: Decimal) -> None:
        """Price a unit that is not in the catalog."""
        if price < 0:
            raise ValueError("Price cannot be negative")
        self._apartment = ApartmentOption(id=CUSTOM_APARTMENT_ID, name="Custom price", price=Decimal(price))

    @property
    def term_months(self) -> int:
        return self._term_months

    @term_months.setter
    def term_months(self, value: int) -> None:
        if value not in TERMS:
            raise ValueError(f"Term must be one of {TERMS}; got {value}")
        self._term_months = value
        self._interim_payments = {}

    @property
    def down_payment_percent(self) -> int:
        return self._down_payment_percent

    @down_payment_percent.setter
    def down_payment_percent(self, value: int) -> None:
        if not MIN_DOWN_PAYMENT_PERCENT <= value <= MAX_DOWN_PAYMENT_PERCENT:
            raise ValueError(
                f"Down payment must be between {MIN_DOWN_PAYMENT_PERCENT} and "
                f"{MAX_DOWN_PAYMENT_PERCENT} percent; got {value}"
            )
        self._down_payment_percent = int(value)
        if self.is_full_cash:
            self._interim_payments = {}

    @property
    def is_full_cash(self) -> bool:
        return self._down_payment_percent == MAX_DOWN_PAYMENT_PERCENT

    @property
    def interim_payments(self) -> Dict[int, Decimal]:
        return dict(self._interim_payments)

    def interim_months(self) -> List[int]:
        """Months of the current term on which an interim payment may fall."""
        count = self._term_months // INTERIM_PAYMENT_INTERVAL
        return [(i + 1) * INTERIM_PAYMENT_INTERVAL for i in range(count)]

    def set_interim_payment(self, month: int, value: Optional[str | Decimal]) -> None:
        """Set the interim payment for ``month``.

        String values are read the way a form field is: every non-digit is
        dropped. A zero or empty value removes the entry.
        """
        if self.is_full_cash:
            raise ValueError("Interim payments are disabled for a full cash payment")
        if month not in self.interim_months():
            raise ValueError(f"Month {month} does not accept interim payments for a {self._term_months}-month term")
        if value is None:
            amount = Decimal(0)
        elif isinstance(value, str):
            amount = digits_only_amount(value)
        else:
            amount = Decimal(value)
        if amount < 0:
            raise ValueError("Interim payment cannot be negative")
        if amount == 0:
            self._interim_payments.pop(month, None)
        else:
            self._interim_payments[month] = amount

    def clear_interim_payments(self) -> None:
        self._interim_payments = {}

    def snapshot(self) -> PlanInput:
        """Return the current selections as an immutable calculation input."""
        return PlanInput(
            price=self._apartment.price,
            down_payment_percent=self._down_payment_percent,
            term_months=self._term_months,
            interim_payments=dict(self._interim_payments),
        )

    def calculate(self) -> PaymentPlan:
        """Recompute the full plan from the current selections."""
        return compute_plan(self.snapshot())
