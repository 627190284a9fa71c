"""Core calculation engine for the payment plan calculator.

This module turns a ``PlanInput`` (unit price, down payment percentage,
term and optional interim payments) into a ``PaymentPlan``: a month by month
schedule together with the summary totals. A deferral charge is applied
when the principal weighted average repayment time exceeds the interest-free
period. The calculation is a pure function of its input.
"""

from __future__ import annotations

import logging
from decimal import Decimal, getcontext
from typing import List, Optional, Tuple

from .config import (
    INTEREST_FREE_MONTHS,
    INTEREST_RATE_MONTHLY,
    MAX_DOWN_PAYMENT_PERCENT,
    MIN_DOWN_PAYMENT_PERCENT,
    ROUNDING_TOLERANCE,
    TERMS,
)
from .data_models import ChartData, PaymentPlan, PaymentRow, PlanInput
from .formatter import format_currency

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

INTERIM_OVERFLOW_MESSAGE = "Interim payments total cannot exceed the remaining principal."


class InvalidPlanInputError(ValueError):
    """Raised by ``validate_input`` for values outside the documented ranges."""


def validate_input(plan_input: PlanInput) -> None:
    """Check that ``plan_input`` lies inside the documented constraints.

    ``compute_plan`` trusts its input; callers that accept free-form values
    (the command-line interface) run this first.
    """
    if plan_input.price < 0:
        raise InvalidPlanInputError("Price cannot be negative")
    percent = plan_input.down_payment_percent
    if not MIN_DOWN_PAYMENT_PERCENT <= percent <= MAX_DOWN_PAYMENT_PERCENT:
        raise InvalidPlanInputError(
            f"Down payment must be between {MIN_DOWN_PAYMENT_PERCENT}% and "
            f"{MAX_DOWN_PAYMENT_PERCENT}%; got {percent}%"
        )
    if plan_input.term_months not in TERMS:
        allowed = ", ".join(str(t) for t in TERMS)
        raise InvalidPlanInputError(f"Term must be one of {allowed} months; got {plan_input.term_months}")
    for month, amount in plan_input.interim_payments.items():
        if not 1 <= month <= plan_input.term_months:
            raise InvalidPlanInputError(
                f"Interim payment month {month} is outside the {plan_input.term_months}-month term"
            )
        if amount < 0:
            raise InvalidPlanInputError(f"Interim payment for month {month} cannot be negative")


def _average_term(
    plan_input: PlanInput, principal: Decimal, total_interim: Decimal
) -> Tuple[Decimal, Optional[Decimal], Optional[str]]:
    """Return the principal weighted average repayment month.

    Each month contributes the principal repaid in it (an equal share of the
    principal not covered by interim payments, plus that month's interim
    payment) multiplied by the month number. The sum is divided by the unit
    price, so the down payment counts as repaid at month 0.

    Returns the average, the monthly principal portion (``None`` when no
    principal is financed) and an error message when interim payments exceed
    the principal. In that case the portion is negative and the average is
    still computed from it.
    """
    price = plan_input.price
    if price <= 0 or principal <= 0:
        return ZERO, None, None

    term = plan_input.term_months
    portion = (principal - total_interim) / Decimal(term)
    error = None
    if portion < 0:
        error = INTERIM_OVERFLOW_MESSAGE
        logger.warning(
            "Interim payments %s exceed principal %s; average term is an estimate",
            total_interim,
            principal,
        )

    weighted_sum = ZERO
    for month in range(1, term + 1):
        principal_this_month = portion + plan_input.interim_for(month)
        weighted_sum += principal_this_month * month
    return weighted_sum / price, portion, error


def _interest_info(average_term: Decimal, total_interest: Decimal) -> str:
    if total_interest > 0:
        rate = f"{INTEREST_RATE_MONTHLY * 100:.2f}"
        return (
            f"Average term {average_term:.2f} months. A monthly {rate}% deferral "
            f"charge (total {format_currency(total_interest)}) has been applied."
        )
    return (
        f"Average term {average_term:.2f} months. No deferral charge applied because "
        f"it does not exceed {INTEREST_FREE_MONTHS} months."
    )


def _build_schedule(
    plan_input: PlanInput,
    down_payment: Decimal,
    opening_balance: Decimal,
    monthly_payment: Decimal,
) -> List[PaymentRow]:
    term = plan_input.term_months
    schedule: List[PaymentRow] = [
        PaymentRow(month=0, description="Down payment", payment=down_payment, balance=opening_balance)
    ]
    remaining = opening_balance
    for month in range(1, term + 1):
        payment = monthly_payment
        description = "Monthly installment"
        interim = plan_input.interim_for(month)
        if interim:
            payment += interim
            description += f" + month {month} interim payment"
        remaining -= payment

        # Absorb the residual left by the division into the last installment.
        if month == term and -ROUNDING_TOLERANCE < remaining < ROUNDING_TOLERANCE:
            payment += remaining
            remaining = ZERO

        schedule.append(
            PaymentRow(month=month, description=description, payment=payment, balance=max(ZERO, remaining))
        )
    return schedule


def compute_plan(plan_input: PlanInput) -> PaymentPlan:
    """Compute the payment plan for ``plan_input``.

    Parameters
    ----------
    plan_input: PlanInput
        The calculation inputs. They are assumed to satisfy the documented
        constraints (see ``validate_input``).

    Returns
    -------
    PaymentPlan
        Summary totals, the schedule (``term_months + 1`` rows, starting with
        the down payment at month 0) and the chart breakdown.
    """
    price = plan_input.price
    term = plan_input.term_months

    down_payment = price * Decimal(plan_input.down_payment_percent) / Decimal(100)
    principal = price - down_payment
    total_interim = sum(plan_input.interim_payments.values(), ZERO)

    average_term, portion, interim_error = _average_term(plan_input, principal, total_interim)

    # Step function: crossing the threshold switches the whole charge on.
    total_interest = ZERO
    if average_term > INTEREST_FREE_MONTHS:
        total_interest = principal * INTEREST_RATE_MONTHLY * Decimal(term - INTEREST_FREE_MONTHS)
    interest_info = _interest_info(average_term, total_interest)

    total_owed = principal + total_interest
    amount_for_monthly = total_owed - total_interim
    monthly_payment = amount_for_monthly / Decimal(term) if amount_for_monthly > 0 else ZERO

    total_monthly = monthly_payment * Decimal(term)
    total_payment = down_payment + total_interim + total_monthly

    schedule = _build_schedule(plan_input, down_payment, total_owed, monthly_payment)

    logger.debug(
        "Computed plan: price=%s percent=%s term=%s average_term=%s interest=%s monthly=%s",
        price,
        plan_input.down_payment_percent,
        term,
        average_term,
        total_interest,
        monthly_payment,
    )

    return PaymentPlan(
        down_payment_amount=down_payment,
        principal=principal,
        total_interim_payments=total_interim,
        average_term_months=average_term,
        total_interest=total_interest,
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        schedule=schedule,
        interest_info=interest_info,
        chart_data=ChartData(
            down_payment=down_payment,
            interim_payments=total_interim,
            monthly_payments=total_monthly,
        ),
        monthly_principal_portion=portion,
        interim_error=interim_error,
    )
