"""Column profiling.

Schema inference over an in-memory table: per-column type, cardinality,
missingness and basic numeric statistics.
"""

from .columns import infer_column_type, is_absent, profile_columns
from .overview import column_summary, summarize_overview

__all__ = [
    "column_summary",
    "infer_column_type",
    "is_absent",
    "profile_columns",
    "summarize_overview",
]
