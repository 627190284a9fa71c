from __future__ import annotations

from decimal import Decimal

import pytest

from payment_plan.utils import decimal_from_str, digits_only_amount, parse_amount, parse_interim_strings


@pytest.mark.parametrize(
    "text, expected",
    [
        ("7500000", Decimal("7500000")),
        ("7,500,000", Decimal("7500000")),
        ("600k", Decimal("600000")),
        ("7.5m", Decimal("7500000")),
        (" 1_000 ", Decimal("1000")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "inf", "nan", "12x"])
def test_parse_amount_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_decimal_from_str_error_message():
    with pytest.raises(ValueError, match="Invalid numeric value: twelve"):
        decimal_from_str("twelve")


def test_digits_only_amount():
    assert digits_only_amount("1.250.000 TL") == Decimal("1250000")
    assert digits_only_amount("") == Decimal("0")


def test_parse_interim_strings_sums_repeated_months():
    payments = parse_interim_strings(["6:100k", "12:250000", "6:50k"])

    assert payments == {6: Decimal("150000"), 12: Decimal("250000")}


@pytest.mark.parametrize("item", ["6", "6:1:2", "six:1000"])
def test_parse_interim_strings_rejects_bad_entries(item):
    with pytest.raises(ValueError):
        parse_interim_strings([item])
