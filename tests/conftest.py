"""Shared fixtures for the payment plan tests."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from payment_plan.data_models import PlanInput


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by the CLI so they don't outlive a test's streams."""
    yield
    logger = logging.getLogger("payment_plan")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def valley_input() -> PlanInput:
    """Valley view unit, 25 % down, 24 months, no interim payments."""
    return PlanInput(price=Decimal("7500000"), down_payment_percent=25, term_months=24)
