from __future__ import annotations

from typing import Sequence

from ..models import ColumnProfile, ColumnType, DatasetOverview


MAX_DISTRIBUTION_COLUMNS = 10


def column_summary(profiles: Sequence[ColumnProfile]) -> str:
    """Compact `name (type)` listing used in LLM prompts."""
    return ", ".join(f"{p.name} ({p.type.value})" for p in profiles)


def summarize_overview(profiles: Sequence[ColumnProfile], row_count: int) -> DatasetOverview:
    """
    Headline numbers for the overview cards.

    Completeness is the share of non-missing cells, clamped at 0. The mean
    of the first few numeric columns feeds the mini distribution chart.
    """
    numeric = [p for p in profiles if p.type == ColumnType.NUMBER]
    strings = [p for p in profiles if p.type == ColumnType.STRING]
    missing = sum(p.missing_values for p in profiles)

    total_cells = row_count * len(profiles)
    if total_cells > 0:
        completeness = max(0.0, 100.0 - missing / total_cells * 100.0)
    else:
        completeness = 100.0

    means = {p.name: float(p.mean or 0) for p in numeric[:MAX_DISTRIBUTION_COLUMNS]}

    return DatasetOverview(
        row_count=row_count,
        column_count=len(profiles),
        numeric_columns=len(numeric),
        string_columns=len(strings),
        missing_values=missing,
        completeness=round(completeness, 1),
        numeric_means=means,
    )
