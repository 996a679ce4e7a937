"""Data overview: summary cards, column table and mean distribution."""
import streamlit as st
import pandas as pd
import matplotlib.pyplot as plt
from typing import List

from insightflow.charts import BACKGROUND, COLORS as CHART_COLORS, AXIS
from insightflow.models import ColumnProfile, DatasetOverview

from style_utils import TYPE_ICONS, format_number, format_stat, stat_card


def render_summary_cards(overview: DatasetOverview) -> None:
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        stat_card("Total Rows", format_number(overview.row_count))
    with col2:
        stat_card(
            "Columns",
            str(overview.column_count),
            f"{overview.numeric_columns} Numeric, {overview.string_columns} Categorical",
        )
    with col3:
        stat_card(
            "Missing Values",
            format_number(overview.missing_values),
            "Consider cleaning data" if overview.missing_values > 0 else "Data looks clean",
        )
    with col4:
        stat_card("Completeness", f"{overview.completeness:.1f}%")


def render_mean_distribution(overview: DatasetOverview) -> None:
    st.markdown("**Numeric means**")
    if not overview.numeric_means:
        st.caption("No numeric data to preview.")
        return

    names = list(overview.numeric_means.keys())
    values = list(overview.numeric_means.values())
    fig, ax = plt.subplots(figsize=(5, 3))
    fig.patch.set_facecolor(BACKGROUND)
    ax.set_facecolor(BACKGROUND)
    ax.bar(names, values, color=[CHART_COLORS[i % len(CHART_COLORS)] for i in range(len(names))])
    ax.tick_params(colors=AXIS, labelsize=7)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    plt.tight_layout()
    st.pyplot(fig)
    plt.close(fig)


def profiles_frame(profiles: List[ColumnProfile]) -> pd.DataFrame:
    """One display row per column."""
    return pd.DataFrame(
        [
            {
                "Column": p.name,
                "Type": f"{TYPE_ICONS.get(p.type.value, '')} {p.type.value}",
                "Unique": p.unique_values,
                "Missing": p.missing_values,
                "Min": format_stat(p.min),
                "Max": format_stat(p.max),
                "Mean": format_stat(p.mean),
                "Sample": ", ".join("∅" if v is None or v == "" else str(v) for v in p.sample),
            }
            for p in profiles
        ]
    )


def render_column_table(profiles: List[ColumnProfile]) -> None:
    st.markdown("**Columns**")
    st.dataframe(profiles_frame(profiles), hide_index=True, width="stretch")
