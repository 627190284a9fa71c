"""Output helpers for the payment plan calculator.

This module renders plans for people: currency strings in the Turkish lira
style used by the sales office, plain-text summary and schedule tables for
the terminal, and the fully formatted ``PlanDocument`` consumed by the
document exporter.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, Optional

from .config import CURRENCY_SYMBOL
from .data_models import DocumentRow, PaymentPlan, PaymentRow, PlanDocument

NOT_SPECIFIED = "Not specified"


def format_currency(amount: Decimal, digits: int = 0) -> str:
    """Format ``amount`` as lira, e.g. ``₺7.500.000`` or ``₺287.507,81``.

    Thousands are grouped with ``.`` and decimals separated with ``,``.
    """
    value = Decimal(amount)
    quantum = Decimal(1).scaleb(-digits)
    value = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    text = f"{abs(value):,.{digits}f}"
    # swap the separators: 1,234.5 -> 1.234,5
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_SYMBOL}{text}"


def print_summary(plan: PaymentPlan, price: Optional[Decimal] = None) -> None:
    """Print the plan totals in a human-readable format."""
    print("Summary")
    print("-" * 72)
    if price is not None:
        print(f"Apartment price       : {format_currency(price)}")
    print(f"Down payment          : {format_currency(plan.down_payment_amount)}")
    print(f"Interim payments total: {format_currency(plan.total_interim_payments)}")
    print(f"Monthly installment   : {format_currency(plan.monthly_payment)}")
    print(f"Total deferral charge : {format_currency(plan.total_interest)}")
    print(f"Total repayment       : {format_currency(plan.total_payment)}")
    print("-" * 72)
    print(plan.interest_info)
    if plan.interim_error:
        print(f"Warning: {plan.interim_error}")


def print_schedule(schedule: Iterable[PaymentRow]) -> None:
    """Print the payment schedule as a simple table."""
    print("\t".join(["Month", "Payment", "Balance", "Description"]))
    for row in schedule:
        print(
            "\t".join(
                [
                    str(row.month),
                    format_currency(row.payment),
                    format_currency(row.balance),
                    row.description,
                ]
            )
        )


def build_document(
    plan: PaymentPlan,
    *,
    price: Decimal,
    down_payment_percent: int,
    term_months: int,
    apartment_type: str = "",
    customer_name: str = "",
    apartment_details: str = "",
    chart_image: Optional[bytes] = None,
) -> PlanDocument:
    """Return the display-ready document for ``plan``.

    Monetary values are formatted with ``format_currency``; missing customer
    fields read "Not specified".
    """
    rows = [
        DocumentRow(
            month=f"Month {row.month}",
            description=row.description,
            payment=format_currency(row.payment),
            balance=format_currency(row.balance),
        )
        for row in plan.schedule
    ]
    return PlanDocument(
        customer_name=customer_name.strip() or NOT_SPECIFIED,
        apartment_details=apartment_details.strip() or NOT_SPECIFIED,
        apartment_type=apartment_type,
        apartment_price=format_currency(price),
        total_payment=format_currency(plan.total_payment),
        monthly_payment=format_currency(plan.monthly_payment),
        down_payment_amount=format_currency(plan.down_payment_amount),
        down_payment_percent=f"%{down_payment_percent}",
        term=f"{term_months} months",
        interest_info=plan.interest_info,
        total_interim_payments=format_currency(plan.total_interim_payments),
        total_interest=format_currency(plan.total_interest),
        chart_image=chart_image,
        schedule=rows,
        interim_error=plan.interim_error,
    )


def plan_to_dict(plan: PaymentPlan) -> Dict[str, Any]:
    """Convert a plan into JSON-serialisable data."""
    summary = {
        "down_payment_amount": float(plan.down_payment_amount),
        "principal": float(plan.principal),
        "total_interim_payments": float(plan.total_interim_payments),
        "average_term_months": float(plan.average_term_months),
        "total_interest": float(plan.total_interest),
        "monthly_payment": float(plan.monthly_payment),
        "total_payment": float(plan.total_payment),
        "interest_info": plan.interest_info,
        "interim_error": plan.interim_error,
    }
    chart = {
        "down_payment": float(plan.chart_data.down_payment),
        "interim_payments": float(plan.chart_data.interim_payments),
        "monthly_payments": float(plan.chart_data.monthly_payments),
    }
    schedule = [
        {
            "month": row.month,
            "description": row.description,
            "payment": float(row.payment),
            "balance": float(row.balance),
        }
        for row in plan.schedule
    ]
    return {"summary": summary, "chart": chart, "schedule": schedule}
