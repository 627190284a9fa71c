"""Utility functions for the payment plan calculator.

Helpers for turning user-typed strings into ``Decimal`` amounts and interim
payment maps. All of them raise ``ValueError`` with a readable message on bad
input; the command-line layer converts these into ``click`` errors.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    Commas, underscores and spaces used as digit grouping are stripped.
    """
    try:
        cleaned = re.sub(r"[,_\s]", "", value)
        return Decimal(cleaned)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc


def parse_amount(value: str) -> Decimal:
    """Parse an amount with an optional ``k``/``m`` suffix.

    ``"600k"`` is 600,000 and ``"7.5m"`` is 7,500,000.
    """
    text = value.strip().lower()
    factor = Decimal(1)
    if text.endswith("k"):
        factor = Decimal(1_000)
        text = text[:-1]
    elif text.endswith("m"):
        factor = Decimal(1_000_000)
        text = text[:-1]
    amount = decimal_from_str(text) * factor
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value}")
    return amount


def digits_only_amount(value: str) -> Decimal:
    """Read an amount typed into a form field, keeping only its digits.

    ``"1.250.000 TL"`` becomes 1250000; a field without digits is 0.
    """
    digits = re.sub(r"\D", "", value)
    return Decimal(digits) if digits else Decimal(0)


def parse_interim_strings(values: Iterable[str]) -> Dict[int, Decimal]:
    """Parse ``MONTH:AMOUNT`` strings into an interim payment map.

    Entries for the same month are added together.
    """
    payments: Dict[int, Decimal] = {}
    for item in values:
        parts = item.split(":")
        if len(parts) != 2:
            raise ValueError(f"Interim payment must be in MONTH:AMOUNT format; got {item}")
        month_str, amount_str = parts
        try:
            month = int(month_str.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid interim payment month: {month_str}") from exc
        amount = parse_amount(amount_str)
        payments[month] = payments.get(month, Decimal(0)) + amount
    return payments
