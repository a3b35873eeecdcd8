"""matplotlib figures for the projection views.

Figures are built with the object API (no pyplot state), so callers can
embed them in any canvas or export them with ``to_png``.
"""
import io

from matplotlib.figure import Figure

from models.interest import InterestResult
from utils.constants import CHART_COLORS
from utils.date_helpers import friendly_month


class ChartService:
    def __init__(self, figsize: tuple[float, float] = (8, 2.8), dpi: int = 80):
        self._figsize = figsize
        self._dpi = dpi

    def interest_timeline(self, result: InterestResult) -> Figure:
        fig, ax = self._new_figure()
        points = result.timeline
        if len(points) < 2:
            self._no_data(ax)
            return fig

        months = [p.month for p in points]
        ax.plot(months, [p.balance for p in points], color=CHART_COLORS["balance"], label="Balance")
        ax.plot(
            months,
            [p.total_contribution for p in points],
            color=CHART_COLORS["contribution"],
            linestyle="--",
            label="Contributions",
        )
        if result.real_end_balance is not None:
            ax.plot(
                months,
                [p.real_balance for p in points],
                color=CHART_COLORS["real_balance"],
                label="Real balance",
            )
        ax.set_xlabel("Month")
        ax.legend(loc="upper left", fontsize="small")
        self._thousands_axis(ax)
        return fig

    def monthly_forecast(self, data: list[dict]) -> Figure:
        """Grouped income/expense bars, one group per forecast month."""
        fig, ax = self._new_figure()
        if not data:
            self._no_data(ax)
            return fig

        labels = [d["month"][5:] for d in data]
        incomes = [d.get("income", 0) for d in data]
        expenses = [d.get("expense", 0) for d in data]

        x = list(range(len(labels)))
        w = 0.35
        ax.bar([i - w / 2 for i in x], incomes, w, color=CHART_COLORS["income"], label="Income")
        ax.bar([i + w / 2 for i in x], expenses, w, color=CHART_COLORS["expense"], label="Expense")
        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=45 if len(labels) > 12 else 0, ha="right")
        self._thousands_axis(ax)
        return fig

    def trend(self, points: list[dict], color: str = CHART_COLORS["trend"]) -> Figure:
        """Line chart over [{month, value}] rows as returned by the trend helpers."""
        fig, ax = self._new_figure()
        if not points:
            self._no_data(ax)
            return fig

        x = list(range(len(points)))
        ax.plot(x, [p["value"] for p in points], color=color, marker="o")
        ax.set_xticks(x)
        ax.set_xticklabels([friendly_month(p["month"]) for p in points], rotation=45, ha="right")
        self._thousands_axis(ax)
        return fig

    def to_png(self, fig: Figure) -> bytes:
        buffer = io.BytesIO()
        fig.savefig(buffer, format="png")
        return buffer.getvalue()

    def _new_figure(self):
        fig = Figure(figsize=self._figsize, dpi=self._dpi, tight_layout=True)
        ax = fig.add_subplot(111)
        return fig, ax

    def _no_data(self, ax):
        ax.text(0.5, 0.5, "No data", ha="center", va="center",
                transform=ax.transAxes, color="gray")

    def _thousands_axis(self, ax):
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
