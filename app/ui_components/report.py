"""AI report generator: column selection and structured report display."""
import streamlit as st
from typing import List

from insightflow.errors import ReportGenerationError
from insightflow.models import ColumnProfile, Table
from insightflow.synth import generate_detailed_report, render_report_markdown

from llm_utils import get_settings, render_report


def render_report_generator(table: Table, profiles: List[ColumnProfile]) -> None:
    names = [p.name for p in profiles]
    types = {p.name: p.type.value for p in profiles}

    selection_col, output_col = st.columns([1, 2])
    with selection_col:
        st.markdown("**Focus Columns**")
        selected = st.multiselect(
            "Columns",
            names,
            default=names[:3],
            format_func=lambda n: f"{n} ({types[n]})",
            key="report_columns",
        )
        generate = st.button("Generate Report", type="primary", disabled=not selected, key="report_generate")

    with output_col:
        if generate and selected:
            with st.spinner("Analyzing..."):
                try:
                    st.session_state["report"] = generate_detailed_report(table, selected, settings=get_settings())
                except ReportGenerationError as e:
                    st.session_state["report"] = None
                    st.error(str(e))

        report = st.session_state.get("report")
        if report is not None:
            render_report(report)
            st.download_button(
                label="Download Report",
                data=render_report_markdown(report),
                file_name="insightflow-report.md",
                mime="text/markdown",
                key="download_report",
            )
        elif not generate:
            st.info('Select specific columns on the left and click "Generate Report" to receive AI-powered insights tailored to your selection.')
