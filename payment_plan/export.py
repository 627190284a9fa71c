"""Export of payment plans to files.

JSON and CSV carry the raw figures for further processing. The PDF document
is the customer-facing plan: summary, distribution chart, detailed schedule
and the legal notice, laid out on A4 pages with matplotlib's PDF backend.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.image as mpimg
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from .config import DISCLAIMER
from .data_models import DocumentRow, PaymentPlan, PlanDocument
from .formatter import plan_to_dict

logger = logging.getLogger(__name__)

A4_INCHES = (8.27, 11.69)
MARGIN = 0.06  # fraction of the page width
HEADER_GREEN = "#064e3b"
SECTION_GREY = "#f3f4f6"
TOTAL_YELLOW = "#fef3c7"
CHARGE_RED = "#dc2626"
ROWS_PER_PAGE = 40


class ExportError(Exception):
    """Raised when a plan cannot be written out."""


class ChartUnavailableError(ExportError):
    """Raised when the chart image needed for the PDF is missing."""


def export_to_json(path: Path, plan: PaymentPlan) -> None:
    """Export the plan summary, chart breakdown and schedule to JSON."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(plan_to_dict(plan), f, indent=2, ensure_ascii=False)


def export_to_csv(path: Path, plan: PaymentPlan) -> None:
    """Export the schedule to a CSV file."""
    header = ["Month", "Description", "Payment", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in plan.schedule:
            writer.writerow([row.month, row.description, float(row.payment), float(row.balance)])


def default_pdf_filename(customer_name: str = "") -> str:
    name = customer_name.strip().replace(" ", "_")
    return f"Payment_Plan_{name or 'simulation'}.pdf"


def _summary_rows(document: PlanDocument) -> List[List[str]]:
    return [
        ["Customer information", ""],
        ["Full name", document.customer_name],
        ["Apartment", document.apartment_details],
        ["Payment plan summary", ""],
        ["Apartment type", document.apartment_type],
        ["List price", document.apartment_price],
        ["Down payment", f"{document.down_payment_amount} ({document.down_payment_percent})"],
        ["Term", document.term],
        ["Interim payments total", document.total_interim_payments],
        ["Average monthly installment", document.monthly_payment],
        ["Total deferral charge", document.total_interest],
        ["Total repayment", document.total_payment],
    ]


def _draw_summary(fig: Figure, document: PlanDocument, issued: date) -> float:
    """Draw header, title and summary table; return the table's bottom edge."""
    fig.text(1 - MARGIN, 0.975, f"Date: {issued.strftime('%d.%m.%Y')}", ha="right", va="top", fontsize=9, color="#646464")
    fig.add_artist(Line2D([MARGIN, 1 - MARGIN], [0.955, 0.955], color="black", linewidth=0.8))
    fig.text(0.5, 0.935, "Payment Plan Simulation", ha="center", va="top", fontsize=18, color="#282828")

    rows = _summary_rows(document)
    top, row_height = 0.9, 0.022
    height = row_height * len(rows)
    ax = fig.add_axes([MARGIN, top - height, 1 - 2 * MARGIN, height])
    ax.axis("off")
    table = ax.table(cellText=rows, cellLoc="left", loc="upper center", bbox=[0, 0, 1, 1])
    table.auto_set_font_size(False)
    table.set_fontsize(9)
    for (r, c), cell in table.get_celld().items():
        label = rows[r][0]
        if c == 0:
            cell.get_text().set_fontweight("bold")
        if label in ("Customer information", "Payment plan summary"):
            cell.set_facecolor(SECTION_GREY)
            cell.get_text().set_fontweight("bold")
            if c == 1:
                cell.visible_edges = "TRB"
            else:
                cell.visible_edges = "TLB"
        elif label == "Total repayment":
            cell.set_facecolor(TOTAL_YELLOW)
            cell.get_text().set_fontweight("bold")
        elif label == "Average monthly installment" and c == 1:
            cell.get_text().set_fontweight("bold")
        elif label == "Total deferral charge" and c == 1:
            cell.get_text().set_color(CHARGE_RED)
    return top - height


def _draw_chart(fig: Figure, image: bytes, top: float) -> float:
    fig.text(0.5, top - 0.02, "Payment distribution", ha="center", va="top", fontsize=12)
    pixels = mpimg.imread(BytesIO(image), format="png")
    height_px, width_px = pixels.shape[0], pixels.shape[1]
    width = 0.4
    height = width * (height_px / width_px) * (A4_INCHES[0] / A4_INCHES[1])
    bottom = top - 0.04 - height
    ax = fig.add_axes([(1 - width) / 2, bottom, width, height])
    ax.imshow(pixels)
    ax.axis("off")
    return bottom


def _draw_notes(fig: Figure, document: PlanDocument, top: float) -> None:
    notes = [document.interest_info]
    if document.interim_error:
        notes.append(f"Warning: {document.interim_error}")
    fig.text(0.5, top - 0.015, "\n".join(notes), ha="center", va="top", fontsize=8, color="#6b7280", wrap=True)


def _draw_schedule_page(fig: Figure, rows: Sequence[DocumentRow]) -> None:
    cell_text = [[r.month, r.description, r.payment, r.balance] for r in rows]
    row_height = 0.02
    height = row_height * (len(cell_text) + 1)
    top = 0.95
    ax = fig.add_axes([MARGIN, top - height, 1 - 2 * MARGIN, height])
    ax.axis("off")
    table = ax.table(
        cellText=cell_text,
        colLabels=["Month", "Description", "Payment", "Remaining balance"],
        colWidths=[0.14, 0.46, 0.2, 0.2],
        loc="upper center",
        bbox=[0, 0, 1, 1],
    )
    table.auto_set_font_size(False)
    table.set_fontsize(8)
    for (r, c), cell in table.get_celld().items():
        cell.visible_edges = "B"
        cell.get_text().set_horizontalalignment("right" if c >= 2 else "left")
        if r == 0:
            cell.set_facecolor(HEADER_GREEN)
            cell.get_text().set_color("white")
            cell.get_text().set_fontweight("bold")
        elif r % 2 == 0:
            cell.set_facecolor(SECTION_GREY)


def _draw_disclaimer(fig: Figure) -> None:
    fig.text(MARGIN, 0.03, DISCLAIMER, ha="left", va="bottom", fontsize=7, color="#969696", wrap=True)


def _render_pdf(path: Path, document: PlanDocument, issued: date) -> None:
    with PdfPages(path) as pdf:
        fig = plt.figure(figsize=A4_INCHES)
        try:
            bottom = _draw_summary(fig, document, issued)
            bottom = _draw_chart(fig, document.chart_image, bottom)
            _draw_notes(fig, document, bottom)
            pdf.savefig(fig)
        finally:
            plt.close(fig)

        chunks = [document.schedule[i : i + ROWS_PER_PAGE] for i in range(0, len(document.schedule), ROWS_PER_PAGE)]
        for index, chunk in enumerate(chunks):
            fig = plt.figure(figsize=A4_INCHES)
            try:
                _draw_schedule_page(fig, chunk)
                if index == len(chunks) - 1:
                    _draw_disclaimer(fig)
                pdf.savefig(fig)
            finally:
                plt.close(fig)


def export_to_pdf(path: Path, document: PlanDocument, issued: Optional[date] = None) -> Path:
    """Write ``document`` as a PDF file at ``path``.

    Raises
    ------
    ChartUnavailableError
        If the document carries no chart image. Nothing is written.
    ExportError
        If rendering fails. Any partially written file is removed.
    """
    if not document.chart_image:
        raise ChartUnavailableError("The chart image could not be created; the PDF cannot be generated.")

    issued = issued or date.today()
    try:
        _render_pdf(path, document, issued)
    except Exception as exc:
        logger.exception("PDF generation failed for %s", path)
        path.unlink(missing_ok=True)
        raise ExportError("An unexpected error occurred while generating the PDF.") from exc
    logger.info("Payment plan exported to %s", path)
    return path
