"""InsightFlow - upload, profile, chart and summarize tabular data"""
import sys
from pathlib import Path

import streamlit as st

app_dir = Path(__file__).parent
if str(app_dir) not in sys.path:
    sys.path.insert(0, str(app_dir))

from insightflow.errors import IngestError
from insightflow.ingest import parse_file
from insightflow.logging_config import setup_logging
from insightflow.session import AnalysisSession
from insightflow.synth import generate_initial_insights

from llm_utils import get_settings, render_ai_insight
from style_utils import section_header
from ui_components import (
    render_column_table,
    render_mean_distribution,
    render_report_generator,
    render_summary_cards,
    render_visualizer,
)

st.set_page_config(
    page_title="InsightFlow",
    page_icon="📊",
    layout="wide"
)

UPLOAD_TYPES = ["csv", "xlsx", "xls"]


def get_session() -> AnalysisSession:
    """The active dataset lives in st.session_state; one slot per browser session."""
    if "analysis" not in st.session_state:
        st.session_state["analysis"] = AnalysisSession()
    return st.session_state["analysis"]


def reset_session():
    get_session().reset()
    st.session_state.pop("report", None)
    st.session_state["uploader_key"] = st.session_state.get("uploader_key", 0) + 1


def handle_upload(session: AnalysisSession, uploaded) -> bool:
    """Parse and profile the upload. Returns False if the file was rejected."""
    try:
        table = parse_file(uploaded, filename=uploaded.name)
    except IngestError as e:
        st.error(f"Error processing file. Please ensure it is a valid CSV or Excel file.\n\n{e}")
        return False
    session.load(table, source_name=uploaded.name, source_id=uploaded.file_id)
    st.session_state.pop("report", None)
    return True


def fill_insight(session: AnalysisSession, slot):
    """Fetch the executive summary once per upload into its placeholder; failures only affect this panel."""
    if not session.insight:
        session.insight = generate_initial_insights(session.table, session.profiles, settings=get_settings())
    with slot.container():
        render_ai_insight(session.insight)


def render_landing():
    st.markdown("## Data Analysis **Reimagined**")
    st.markdown(
        "Upload your CSV or Excel files and get instant visualizations, meaningful statistics, "
        "and AI-powered insights without writing a single line of code."
    )


def render_dataset(session: AnalysisSession):
    """Draw everything that depends only on the profiles. Returns the insight placeholder."""
    settings = get_settings()

    section_header("Data Overview", f"{session.source_name} · {session.row_count:,} rows")
    render_summary_cards(session.overview())

    col1, col2 = st.columns([2, 1])
    with col1:
        insight_slot = st.empty()
        with insight_slot.container():
            render_ai_insight(session.insight, is_loading=not session.insight)
    with col2:
        render_mean_distribution(session.overview())

    render_column_table(session.profiles)

    with st.expander("Preview rows"):
        st.dataframe(session.table[: settings.max_rows_for_preview], width="stretch")

    st.markdown("---")
    section_header("Visualizer", "Explore your data with custom figures")
    render_visualizer(session.table, session.profiles, max_rows=settings.max_chart_rows)

    st.markdown("---")
    section_header("AI Report Generator", "Select columns to generate a detailed, intelligent report")
    render_report_generator(session.table, session.profiles)

    return insight_slot


def main():
    setup_logging(get_settings().log_level)
    session = get_session()

    st.title("📊 InsightFlow")
    st.caption("Local & secure data processing")

    if session.is_loaded:
        st.sidebar.button("Upload New File", on_click=reset_session)

    uploaded = st.file_uploader(
        "Upload a CSV or Excel file",
        type=UPLOAD_TYPES,
        key=f"uploader_{st.session_state.get('uploader_key', 0)}",
    )

    if uploaded is not None and not session.is_current(uploaded.file_id):
        if not handle_upload(session, uploaded):
            return

    if not session.is_loaded:
        render_landing()
        return

    insight_slot = render_dataset(session)
    fill_insight(session, insight_slot)


if __name__ == "__main__":
    main()
