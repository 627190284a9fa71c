"""Payment distribution chart.

Draws the split of the total repayment between the down payment, the
interim payments and the monthly installments as a donut chart and returns
it as PNG bytes, ready to be written to disk or embedded in a document.
"""

from __future__ import annotations

import logging
from io import BytesIO

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .data_models import ChartData

logger = logging.getLogger(__name__)

LABELS = ["Down payment", "Interim payments", "Installments total"]
COLORS = ["#064e3b", "#fcd34d", "#34d399"]
PLACEHOLDER_COLOR = "#e5e7eb"


def build_chart(chart_data: ChartData) -> Figure:
    """Create the donut chart figure for ``chart_data``.

    When every value is zero a single grey ring labelled "No data" is drawn
    without a legend; a pie of zeros cannot be rendered.
    """
    fig, ax = plt.subplots(figsize=(5, 5))
    wedge_style = dict(width=0.4, edgecolor="white", linewidth=4)

    if chart_data.has_data:
        values = [
            float(chart_data.down_payment),
            float(chart_data.interim_payments),
            float(chart_data.monthly_payments),
        ]
        ax.pie(values, colors=COLORS, startangle=90, counterclock=False, wedgeprops=wedge_style)
        ax.legend(LABELS, loc="upper center", bbox_to_anchor=(0.5, 0.02), ncol=3, frameon=False, fontsize=9)
    else:
        ax.pie([1], colors=[PLACEHOLDER_COLOR], startangle=90, wedgeprops=wedge_style)
        ax.text(0, 0, "No data", ha="center", va="center", fontsize=14, color="#666")

    ax.set_aspect("equal")
    return fig


def render_chart(chart_data: ChartData, dpi: int = 100) -> bytes:
    """Render the chart and return it as PNG bytes."""
    fig = build_chart(chart_data)
    buffer = BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight", dpi=dpi)
    finally:
        plt.close(fig)
    image = buffer.getvalue()
    logger.debug("Rendered payment chart (%d bytes)", len(image))
    return image
