"""InsightFlow: upload a table, infer its schema, chart it, ask an LLM about it."""

from .ingest import parse_file
from .models import AIReport, ChartConfig, ChartType, ColumnProfile, ColumnType, DatasetOverview
from .profile import profile_columns
from .session import AnalysisSession

__version__ = "0.1.0"

__all__ = [
    "AIReport",
    "AnalysisSession",
    "ChartConfig",
    "ChartType",
    "ColumnProfile",
    "ColumnType",
    "DatasetOverview",
    "parse_file",
    "profile_columns",
]
