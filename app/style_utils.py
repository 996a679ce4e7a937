"""Style utilities for consistent UI presentation."""
import streamlit as st

COLORS = {
    "primary": "#6366F1",
    "secondary": "#14B8A6",
    "accent": "#EC4899",
    "warning": "#F59E0B",
    "muted": "#94A3B8",
    "panel": "#0F172A",
    "border": "#1E293B",
    "text": "#E2E8F0",
}

TYPE_ICONS = {
    "number": "🔢",
    "boolean": "☑️",
    "date": "📅",
    "string": "🔤",
}


def format_number(value: float, decimals: int = 0) -> str:
    """Format a number with thousands separators."""
    if decimals == 0:
        return f"{value:,.0f}"
    return f"{value:,.{decimals}f}"


def format_stat(value) -> str:
    """Compact display for min/max/mean; '-' when absent."""
    if value is None:
        return "-"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.2f}"
    return f"{value:,.0f}"


def stat_card(title: str, value: str, subtext: str = ""):
    """Render a summary card with optional subtext."""
    st.markdown(f"""
<div style="padding: 16px; background: {COLORS['panel']}; border: 1px solid {COLORS['border']}; border-radius: 12px; margin-bottom: 8px;">
    <div style="font-size: 0.8em; color: {COLORS['muted']}; text-transform: uppercase; letter-spacing: 0.05em;">{title}</div>
    <div style="font-size: 1.8em; font-weight: 700; color: {COLORS['text']};">{value}</div>
    {"<div style='font-size: 0.75em; color: " + COLORS['muted'] + "; margin-top: 4px;'>" + subtext + "</div>" if subtext else ""}
</div>
    """, unsafe_allow_html=True)


def section_header(title: str, subtitle: str = ""):
    """Render a styled section header."""
    st.markdown(f"""
<div style="margin: 24px 0 16px 0;">
    <h2 style="margin: 0;">{title}</h2>
    {"<p style='margin: 4px 0 0 0; color: " + COLORS['muted'] + "; font-size: 0.9em;'>" + subtitle + "</p>" if subtitle else ""}
</div>
    """, unsafe_allow_html=True)
