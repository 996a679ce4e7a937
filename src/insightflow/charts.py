from __future__ import annotations

import io
import math
import numbers
import time
from typing import Any, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from .models import ChartConfig, ChartType, ColumnProfile, ColumnType, Table  # noqa: E402


MAX_CHART_ROWS = 100
MAX_PIE_SLICES = 10
MISSING_LABEL = "(missing)"

BACKGROUND = "#0f172a"
GRID = "#334155"
AXIS = "#94a3b8"
COLORS = ["#6366f1", "#14b8a6", "#f59e0b", "#ec4899", "#8b5cf6", "#ef4444"]


def default_axes(profiles: Sequence[ColumnProfile]) -> tuple[str, str]:
    """X defaults to the first column, Y to the first numeric one."""
    if not profiles:
        return "", ""
    x = profiles[0].name
    numeric = [p.name for p in profiles if p.type == ColumnType.NUMBER]
    y = numeric[0] if numeric else profiles[0].name
    return x, y


def y_axis_candidates(profiles: Sequence[ColumnProfile]) -> list[str]:
    numeric = [p.name for p in profiles if p.type == ColumnType.NUMBER]
    return numeric if numeric else [p.name for p in profiles]


def _to_number(value: Any) -> float:
    """Lenient numeric coercion; anything unusable becomes NaN."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip() or "nan")
        except ValueError:
            return math.nan
    return math.nan


def _label(value: Any) -> str:
    return MISSING_LABEL if value is None else str(value)


def aggregate_for_pie(table: Table, x_axis: str, y_axis: str, *, max_slices: int = MAX_PIE_SLICES) -> list[dict[str, Any]]:
    """Sum y per distinct x label; largest slices first."""
    totals: dict[str, float] = {}
    for row in table:
        key = _label(row.get(x_axis))
        val = _to_number(row.get(y_axis))
        totals[key] = totals.get(key, 0.0) + (0.0 if math.isnan(val) else val)

    slices = [{"name": k, "value": v} for k, v in totals.items()]
    slices.sort(key=lambda s: s["value"], reverse=True)
    return slices[:max_slices]


def build_chart_data(
    table: Table,
    chart_type: ChartType,
    x_axis: str,
    y_axis: str,
    *,
    max_rows: int = MAX_CHART_ROWS,
) -> list[dict[str, Any]]:
    """
    Rows to plot for a chart.

    Pie charts aggregate by the X column; every other type plots the first
    `max_rows` rows as-is.
    """
    if chart_type == ChartType.PIE:
        return aggregate_for_pie(table, x_axis, y_axis)
    return table[:max_rows]


def _style_axes(ax) -> None:
    ax.set_facecolor(BACKGROUND)
    ax.grid(True, color=GRID, linestyle="--", linewidth=0.6)
    ax.tick_params(colors=AXIS)
    for spine in ax.spines.values():
        spine.set_color(GRID)
    ax.xaxis.label.set_color(AXIS)
    ax.yaxis.label.set_color(AXIS)


def render_chart(table: Table, config: ChartConfig, *, max_rows: int = MAX_CHART_ROWS) -> Figure:
    """Draw the configured chart with matplotlib. Caller closes the figure."""
    fig, ax = plt.subplots(figsize=(10, 5))
    fig.patch.set_facecolor(BACKGROUND)
    y_first = config.y_axis[0] if config.y_axis else config.x_axis

    if config.type == ChartType.PIE:
        slices = build_chart_data(table, ChartType.PIE, config.x_axis, y_first)
        values = [max(s["value"], 0.0) for s in slices]
        if sum(values) > 0:
            ax.pie(
                values,
                labels=[s["name"][:10] for s in slices],
                colors=[COLORS[i % len(COLORS)] for i in range(len(slices))],
                autopct="%1.0f%%",
                textprops={"color": AXIS},
            )
        ax.set_facecolor(BACKGROUND)
    else:
        rows = build_chart_data(table, config.type, config.x_axis, y_first, max_rows=max_rows)
        labels = [_label(r.get(config.x_axis)) for r in rows]
        positions = list(range(len(rows)))
        n_series = max(len(config.y_axis), 1)
        width = 0.8 / n_series

        for i, y_col in enumerate(config.y_axis or [y_first]):
            ys = [_to_number(r.get(y_col)) for r in rows]
            color = COLORS[i % len(COLORS)]
            if config.type == ChartType.LINE:
                ax.plot(positions, ys, color=color, linewidth=3, label=y_col)
            elif config.type == ChartType.AREA:
                ax.plot(positions, ys, color=color, label=y_col)
                ax.fill_between(positions, ys, color=color, alpha=0.3)
            elif config.type == ChartType.SCATTER:
                ax.scatter(positions, ys, color=color, label=y_col)
            else:
                offsets = [p + (i - (n_series - 1) / 2) * width for p in positions]
                ax.bar(offsets, ys, width=width, color=color, label=y_col)

        ax.set_xticks(positions)
        ax.set_xticklabels(labels, rotation=45, ha="right", fontsize=8)
        ax.set_xlabel(config.x_axis)
        ax.set_ylabel(", ".join(config.y_axis))
        _style_axes(ax)
        if positions:
            ax.legend(facecolor=BACKGROUND, edgecolor=GRID, labelcolor=AXIS)

    if config.title:
        ax.set_title(config.title, color="white")
    fig.tight_layout()
    return fig


def figure_to_png(fig: Figure, *, close: bool = True) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(), dpi=120)
    if close:
        plt.close(fig)
    return buf.getvalue()


def download_filename(now_ms: Optional[int] = None) -> str:
    ms = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"insightflow-figure-{ms}.png"
