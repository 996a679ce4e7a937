"""LLM integration helpers for the Streamlit UI.

API Key Priority:
1. User-provided OPENAI_API_KEY from st.secrets (gives you control over costs)
2. OPENAI_API_KEY from the environment
3. Replit's AI_INTEGRATIONS_OPENAI_API_KEY (fallback)
"""
import streamlit as st
from typing import Optional

from insightflow.config import Settings, load_settings
from insightflow.models import AIReport


def get_openai_api_key() -> Optional[str]:
    """Return the key from st.secrets, or None to defer to the environment."""
    try:
        if "OPENAI_API_KEY" in st.secrets:
            return st.secrets["OPENAI_API_KEY"]
    except FileNotFoundError:
        # No secrets.toml configured.
        return None
    return None


def get_settings() -> Settings:
    return load_settings(openai_api_key=get_openai_api_key())


def render_ai_insight(insight: str, is_loading: bool = False) -> None:
    """AI insight panel on the overview."""
    st.subheader("✨ AI Insights")
    if is_loading:
        st.info("Generating insights...")
        return
    if insight:
        st.markdown(insight)
    else:
        st.caption("No insights yet.")


def render_report(report: AIReport) -> None:
    """Render a structured report: header, insights, recommendations, full Markdown."""
    st.markdown(f"### {report.title}")
    st.markdown(report.summary)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Key Insights**")
        for insight in report.key_insights:
            st.markdown(f"- {insight}")
    with col2:
        st.markdown("**Recommendations**")
        for i, rec in enumerate(report.recommendations, 1):
            st.markdown(f"{i}. {rec}")

    if report.markdown_content:
        with st.expander("Full report", expanded=True):
            st.markdown(report.markdown_content)
