"""Command‑line interface for the payment plan calculator.

This module uses the ``click`` library to implement a multi‑command
interface. Users can list the apartment catalog, compute a full payment
schedule or view only the summary. Results can be printed to the terminal or
exported to JSON/CSV files or a PDF document.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional, Tuple

import click

from .chart import render_chart
from .config import APARTMENT_OPTIONS, APARTMENT_PRICES, TERMS, UnknownApartmentError, log_level_from_env
from .data_models import PaymentPlan
from .engine import validate_input
from .export import ExportError, export_to_csv, export_to_json, export_to_pdf
from .form import PlanForm
from .formatter import build_document, format_currency, plan_to_dict, print_schedule, print_summary
from .logging_config import setup_logging
from .utils import parse_amount, parse_interim_strings

logger = logging.getLogger(__name__)


def build_form_from_options(
    apartment: str,
    price: Optional[str],
    down_payment: int,
    term: int,
    interim: Tuple[str, ...],
    customer: str = "",
    details: str = "",
) -> PlanForm:
    """Turn command-line options into a ``PlanForm``.

    ``price`` overrides the catalog price of ``apartment``.
    """
    try:
        form = PlanForm(apartment_id=apartment, term_months=term, down_payment_percent=down_payment)
        if price:
            form.select_custom_price(parse_amount(price))
        for month, amount in parse_interim_strings(interim).items():
            form.set_interim_payment(month, amount)
        validate_input(form.snapshot())
    except UnknownApartmentError as exc:
        raise click.BadParameter(f"Unknown apartment: {exc.args[0]}")
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    logger.debug("Plan options: %s", form.snapshot())
    form.customer_name = customer
    form.apartment_details = details
    return form


def _write_chart(path: Path, plan: PaymentPlan) -> None:
    if path.suffix.lower() != ".png":
        raise click.BadParameter("Chart output must use .png extension")
    path.write_bytes(render_chart(plan.chart_data))
    click.echo(f"Chart written to {path}")


def _export(path: Path, form: PlanForm, plan: PaymentPlan) -> None:
    suffix = path.suffix.lower()
    if suffix == ".json":
        export_to_json(path, plan)
    elif suffix == ".csv":
        export_to_csv(path, plan)
    elif suffix == ".pdf":
        document = build_document(
            plan,
            price=form.apartment.price,
            down_payment_percent=form.down_payment_percent,
            term_months=form.term_months,
            apartment_type=form.apartment.name,
            customer_name=form.customer_name,
            apartment_details=form.apartment_details,
            chart_image=render_chart(plan.chart_data),
        )
        try:
            export_to_pdf(path, document)
        except ExportError as exc:
            raise click.ClickException(str(exc))
    else:
        raise click.BadParameter("Unsupported output format; use .json, .csv or .pdf")
    click.echo(f"Payment plan exported to {path}")


def plan_options(func: Callable) -> Callable:
    """Attach the options shared by the ``schedule`` and ``summary`` commands."""
    options = [
        click.option(
            "--apartment",
            "-a",
            "apartment",
            type=click.Choice([opt.id for opt in APARTMENT_OPTIONS]),
            default=APARTMENT_OPTIONS[0].id,
            show_default=True,
            help="Apartment type from the catalog",
        ),
        click.option("--price", "-p", "price", help="Custom unit price (overrides the catalog price), e.g. 7.5m"),
        click.option(
            "--down-payment",
            "-d",
            "down_payment",
            type=click.IntRange(25, 100),
            default=25,
            show_default=True,
            help="Down payment percentage",
        ),
        click.option(
            "--term",
            "-t",
            "term",
            type=click.Choice([str(t) for t in TERMS]),
            default="24",
            show_default=True,
            help="Term in months",
        ),
        click.option("--interim", "interim", multiple=True, help="Interim payment in MONTH:AMOUNT format, e.g. 12:600k"),
        click.option("--customer", "customer", default="", help="Customer name for the PDF document"),
        click.option("--details", "details", default="", help="Unit details for the PDF document, e.g. 'A Block Floor 5'"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Installment payment plan calculator for apartment purchases."""
    setup_logging("DEBUG" if verbose else log_level_from_env())


@cli.command()
def units() -> None:
    """List the apartment catalog."""
    for option in APARTMENT_OPTIONS:
        click.echo(f"{option.id:12s} {option.name:20s} {format_currency(APARTMENT_PRICES[option.id]):>14s}")


@cli.command()
@plan_options
@click.option("--output", "output", type=str, help="Output file path (.json, .csv or .pdf)")
@click.option("--chart", "chart", type=str, help="Write the payment distribution chart to a .png file")
def schedule(
    apartment: str,
    price: Optional[str],
    down_payment: int,
    term: str,
    interim: Tuple[str, ...],
    customer: str,
    details: str,
    output: Optional[str],
    chart: Optional[str],
) -> None:
    """Compute and print the full payment schedule."""
    form = build_form_from_options(apartment, price, down_payment, int(term), interim, customer, details)
    plan = form.calculate()
    if chart:
        _write_chart(Path(chart), plan)
    if output:
        _export(Path(output), form, plan)
    else:
        print_summary(plan, form.apartment.price)
        print_schedule(plan.schedule)


@cli.command()
@plan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    apartment: str,
    price: Optional[str],
    down_payment: int,
    term: str,
    interim: Tuple[str, ...],
    customer: str,
    details: str,
    output: Optional[str],
) -> None:
    """Compute and print only the summary of a payment plan."""
    form = build_form_from_options(apartment, price, down_payment, int(term), interim, customer, details)
    plan = form.calculate()
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": plan_to_dict(plan)["summary"]}, f, indent=2, ensure_ascii=False)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(plan, form.apartment.price)


if __name__ == "__main__":
    cli()
