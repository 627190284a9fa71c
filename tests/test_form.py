"""Tests for PlanForm selections and reset rules."""

from __future__ import annotations

from decimal import Decimal

import pytest

from payment_plan.config import UnknownApartmentError
from payment_plan.form import PlanForm


def test_defaults_match_first_catalog_unit():
    form = PlanForm()

    assert form.apartment.id == "vadi"
    assert form.term_months == 24
    assert form.down_payment_percent == 25
    assert form.interim_payments == {}


def test_interim_months_follow_term():
    form = PlanForm(term_months=24)
    assert form.interim_months() == [6, 12, 18, 24]

    form.term_months = 12
    assert form.interim_months() == [6, 12]

    form.term_months = 60
    assert form.interim_months()[-1] == 60
    assert len(form.interim_months()) == 10


def test_changing_term_clears_interim_payments():
    form = PlanForm(term_months=36)
    form.set_interim_payment(12, Decimal("500000"))

    form.term_months = 48

    assert form.interim_payments == {}


def test_full_cash_clears_and_disables_interim_payments():
    form = PlanForm()
    form.set_interim_payment(6, Decimal("100000"))

    form.down_payment_percent = 100

    assert form.interim_payments == {}
    with pytest.raises(ValueError):
        form.set_interim_payment(6, Decimal("100000"))


def test_lowering_percent_keeps_interim_payments():
    form = PlanForm(down_payment_percent=50)
    form.set_interim_payment(6, Decimal("100000"))

    form.down_payment_percent = 30

    assert form.interim_payments == {6: Decimal("100000")}


def test_text_amounts_keep_only_digits():
    form = PlanForm()

    form.set_interim_payment(12, "1.250.000 TL")
    assert form.interim_payments[12] == Decimal("1250000")

    form.set_interim_payment(12, "")
    assert 12 not in form.interim_payments


def test_rejects_months_that_do_not_take_interim_payments():
    form = PlanForm(term_months=24)

    with pytest.raises(ValueError):
        form.set_interim_payment(7, Decimal("1000"))
    with pytest.raises(ValueError):
        form.set_interim_payment(30, Decimal("1000"))


@pytest.mark.parametrize("term", [0, 18, 72])
def test_rejects_unknown_terms(term):
    with pytest.raises(ValueError):
        PlanForm(term_months=term)


@pytest.mark.parametrize("percent", [24, 101])
def test_rejects_percent_out_of_range(percent):
    form = PlanForm()
    with pytest.raises(ValueError):
        form.down_payment_percent = percent


def test_unknown_apartment():
    with pytest.raises(UnknownApartmentError):
        PlanForm(apartment_id="penthouse")


def test_custom_price_replaces_catalog_price():
    form = PlanForm()
    form.select_custom_price(Decimal("6000"))

    assert form.apartment.price == Decimal("6000")
    assert form.snapshot().price == Decimal("6000")


def test_snapshot_is_detached_from_later_edits():
    form = PlanForm(apartment_id="deniz")
    form.set_interim_payment(6, Decimal("100000"))
    snapshot = form.snapshot()

    form.set_interim_payment(12, Decimal("200000"))

    assert dict(snapshot.interim_payments) == {6: Decimal("100000")}
    assert snapshot.price == Decimal("9500000")
    with pytest.raises(TypeError):
        snapshot.interim_payments[18] = Decimal("1")


def test_calculate_recomputes_from_current_selections():
    form = PlanForm(apartment_id="vadi", term_months=36)
    with_interest = form.calculate()

    form.down_payment_percent = 100
    cash = form.calculate()

    assert with_interest.total_interest > 0
    assert cash.total_interest == 0
    assert cash.total_payment == Decimal("7500000")


def test_select_apartment_changes_price_and_keeps_interim_payments():
    form = PlanForm(apartment_id="vadi")
    form.set_interim_payment(6, Decimal("100000"))

    form.select_apartment("kismi_deniz")

    assert form.snapshot().price == Decimal("8500000")
    assert form.interim_payments == {6: Decimal("100000")}
