"""LLM synthesis.

Executive summaries and column-focused reports built from the column
profiles and a bounded row sample.
"""

from .insights import generate_detailed_report, generate_initial_insights, render_report_markdown

__all__ = ["generate_detailed_report", "generate_initial_insights", "render_report_markdown"]
