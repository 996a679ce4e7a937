from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from ..config import Settings, load_settings
from ..errors import ReportGenerationError
from ..models import AIReport, ColumnProfile, Table
from ..profile.overview import column_summary

logger = logging.getLogger(__name__)

INSIGHT_ERROR_MESSAGE = "Could not generate insights at this time due to an API error."
NO_INSIGHT_MESSAGE = "No insights generated."

_INSIGHT_SYSTEM = "You are a concise data analyst. Describe only what the sample supports."
_REPORT_SYSTEM = "You are a careful data analyst. Return ONLY valid JSON."


def make_client(settings: Settings) -> Any:
    """OpenAI client for the configured key, or None when no key is set."""
    if not settings.llm_enabled:
        return None
    # Lazy import so profiling and tests work without the SDK configured.
    from openai import OpenAI  # type: ignore

    kwargs: dict[str, Any] = {"api_key": settings.openai_api_key}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return OpenAI(**kwargs)


def _rows_json(rows: Sequence[dict[str, Any]]) -> str:
    return json.dumps(list(rows), ensure_ascii=False, default=str)


def build_insight_prompt(table: Table, profiles: Sequence[ColumnProfile], *, max_rows: int) -> str:
    sample = table[:max_rows]
    return (
        f"I have a dataset with the following columns: {column_summary(profiles)}.\n"
        f"Here is a sample of the first {len(sample)} rows:\n"
        f"{_rows_json(sample)}\n\n"
        "Please provide a brief, high-level executive summary of what this dataset appears to be about.\n"
        "Focus on the nature of the data and 3 potential meaningful insights or trends that might be hidden in it.\n"
        "Keep it under 200 words. Format as clean Markdown."
    )


def build_report_prompt(table: Table, selected_columns: Sequence[str], *, max_rows: int) -> str:
    # Only the selected columns are sent.
    sample = [{col: row.get(col) for col in selected_columns} for row in table[:max_rows]]
    return (
        f"Analyze the following dataset focusing specifically on these columns: {', '.join(selected_columns)}.\n"
        f"Data Sample (first {len(sample)} rows):\n"
        f"{_rows_json(sample)}\n\n"
        "Generate a comprehensive report in structured JSON format with the following fields:\n"
        "- title: A creative title for the analysis.\n"
        "- summary: A paragraph summarizing the findings.\n"
        "- keyInsights: An array of strings, each being a distinct insight.\n"
        "- recommendations: An array of strings, actionable advice based on data.\n"
        "- markdownContent: A full detailed report in Markdown format, including headings, lists, "
        "and analysis of distributions or correlations.\n\n"
        "Return ONLY valid JSON."
    )


def _mock_insight(table: Table, profiles: Sequence[ColumnProfile]) -> str:
    names = ", ".join(p.name for p in profiles)
    return (
        f"**Mock Insight**: This dataset contains {len(table)} records with columns {names}.\n\n"
        "*Note: no OpenAI API key is configured. Set OPENAI_API_KEY to enable AI insights.*"
    )


def _demo_report() -> AIReport:
    return AIReport(
        title="Demo Analysis Report",
        summary="This is a placeholder report generated because no API key was found.",
        key_insights=["Insight 1: Data is loaded.", "Insight 2: You selected columns."],
        recommendations=["Add an API key to see real results.", "Try uploading a different file."],
        markdown_content="## Demo Report\n\nPlease configure OPENAI_API_KEY to use the report generator.",
    )


def generate_initial_insights(
    table: Table,
    profiles: Sequence[ColumnProfile],
    *,
    settings: Optional[Settings] = None,
    client: Any = None,
) -> str:
    """
    Short Markdown executive summary of the dataset.

    Never raises on API failure: the upload/profile path must keep working,
    so errors are logged and a fixed message is returned.
    """
    settings = settings or load_settings()
    client = client if client is not None else make_client(settings)
    if client is None:
        return _mock_insight(table, profiles)

    prompt = build_insight_prompt(table, profiles, max_rows=settings.max_rows_for_ai)
    try:
        resp = client.chat.completions.create(
            model=settings.llm_model,
            messages=[
                {"role": "system", "content": _INSIGHT_SYSTEM},
                {"role": "user", "content": prompt},
            ],
            temperature=0.2,
        )
        text = (resp.choices[0].message.content or "").strip()
        return text or NO_INSIGHT_MESSAGE
    except Exception:  # noqa: BLE001
        logger.warning("Insight generation failed", exc_info=True)
        return INSIGHT_ERROR_MESSAGE


def generate_detailed_report(
    table: Table,
    selected_columns: Sequence[str],
    *,
    settings: Optional[Settings] = None,
    client: Any = None,
) -> AIReport:
    """
    Structured report over the selected columns.

    Raises ReportGenerationError when the call fails or the reply is not a
    valid report; ValueError when no column is selected.
    """
    if not selected_columns:
        raise ValueError("Select at least one column to generate a report.")

    settings = settings or load_settings()
    client = client if client is not None else make_client(settings)
    if client is None:
        return _demo_report()

    prompt = build_report_prompt(table, selected_columns, max_rows=settings.max_rows_for_ai)
    try:
        resp = client.chat.completions.create(
            model=settings.llm_report_model,
            messages=[
                {"role": "system", "content": _REPORT_SYSTEM},
                {"role": "user", "content": prompt},
            ],
            temperature=0.2,
            response_format={"type": "json_object"},
        )
        text = resp.choices[0].message.content or "{}"
    except Exception as e:  # noqa: BLE001
        logger.exception("Report request failed")
        raise ReportGenerationError("Failed to generate report.") from e

    try:
        return AIReport.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Report reply was not a valid report: %s", e)
        raise ReportGenerationError("Failed to generate report.") from e


def render_report_markdown(report: AIReport) -> str:
    lines: list[str] = []
    lines.append(f"# {report.title}\n\n")
    lines.append(f"{report.summary.strip()}\n")

    if report.key_insights:
        lines.append("\n## Key Insights\n\n")
        for insight in report.key_insights:
            lines.append(f"- {insight}\n")

    if report.recommendations:
        lines.append("\n## Recommendations\n\n")
        for i, rec in enumerate(report.recommendations, 1):
            lines.append(f"{i}. {rec}\n")

    if report.markdown_content.strip():
        lines.append("\n---\n\n")
        lines.append(report.markdown_content.strip() + "\n")

    return "".join(lines)
