"""Visualizer: chart type and axis selection plus PNG download."""
import streamlit as st
import matplotlib.pyplot as plt
from typing import List

from insightflow.charts import default_axes, download_filename, figure_to_png, render_chart, y_axis_candidates
from insightflow.models import ChartConfig, ChartType, ColumnProfile, Table

CHART_LABELS = {
    ChartType.BAR: "Bar",
    ChartType.LINE: "Line",
    ChartType.AREA: "Area",
    ChartType.SCATTER: "Scatter",
    ChartType.PIE: "Pie",
}


def render_visualizer(table: Table, profiles: List[ColumnProfile], max_rows: int = 100) -> None:
    if not profiles:
        st.info("No columns to chart.")
        return

    default_x, default_y = default_axes(profiles)
    x_options = [p.name for p in profiles]
    y_options = y_axis_candidates(profiles)

    controls, chart_area = st.columns([1, 3])
    with controls:
        st.markdown("**Configuration**")
        chart_type = st.radio(
            "Chart type",
            list(CHART_LABELS.keys()),
            format_func=lambda t: CHART_LABELS[t],
            horizontal=True,
            key="chart_type",
        )
        x_axis = st.selectbox("X axis (category)", x_options, index=x_options.index(default_x), key="chart_x")
        y_index = y_options.index(default_y) if default_y in y_options else 0
        y_axis = st.selectbox("Y axis (value)", y_options, index=y_index, key="chart_y")

    config = ChartConfig(type=chart_type, x_axis=x_axis, y_axis=[y_axis], title=f"{y_axis} by {x_axis}")
    fig = render_chart(table, config, max_rows=max_rows)

    with chart_area:
        st.pyplot(fig)
        st.download_button(
            label="Download Figure",
            data=figure_to_png(fig, close=False),
            file_name=download_filename(),
            mime="image/png",
            key="download_figure",
        )
    plt.close(fig)
