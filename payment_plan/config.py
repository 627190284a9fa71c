"""Fixed parameters of the payment plan calculator.

The apartment catalog, the interest rate and the allowed terms are the
commercial terms of the sales office. They are kept here as plain constants
so the engine and the command-line interface share one source.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Tuple

INTEREST_RATE_MONTHLY = Decimal("0.0189")  # 1.89 % per month
INTEREST_FREE_MONTHS = 12

TERMS: Tuple[int, ...] = (12, 24, 36, 48, 60)

MIN_DOWN_PAYMENT_PERCENT = 25
MAX_DOWN_PAYMENT_PERCENT = 100

# Interim payments can be scheduled every 6th month of the term.
INTERIM_PAYMENT_INTERVAL = 6

# Absolute band (in currency units) used to snap the final balance to zero.
ROUNDING_TOLERANCE = Decimal("1")

CURRENCY_SYMBOL = "₺"

DISCLAIMER = (
    "Legal notice: This payment plan simulation is not an offer and is "
    "provided for preliminary information only. Prices and payment terms may "
    "not be current. Please contact our sales office for stock, current "
    "prices, personalised payment plans and all other details."
)


@dataclass(frozen=True)
class ApartmentOption:
    """A unit type offered for sale and its catalog price."""

    id: str
    name: str
    price: Decimal


class UnknownApartmentError(KeyError):
    """Raised when an apartment id is not part of the catalog."""


APARTMENT_OPTIONS: Tuple[ApartmentOption, ...] = (
    ApartmentOption(id="vadi", name="Valley view", price=Decimal("7500000")),
    ApartmentOption(id="kismi_deniz", name="Partial sea view", price=Decimal("8500000")),
    ApartmentOption(id="deniz", name="Sea view", price=Decimal("9500000")),
)

APARTMENT_PRICES: Dict[str, Decimal] = {opt.id: opt.price for opt in APARTMENT_OPTIONS}


def get_apartment(apartment_id: str) -> ApartmentOption:
    for option in APARTMENT_OPTIONS:
        if option.id == apartment_id:
            return option
    raise UnknownApartmentError(apartment_id)


def log_level_from_env(default: str = "WARNING") -> str:
    """Return the log level requested through ``PAYMENT_PLAN_LOG_LEVEL``."""
    return os.environ.get("PAYMENT_PLAN_LOG_LEVEL", default).upper()
