from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# A cell value after parsing. Absent cells are None (or "" / NaN before
# normalization); bool is kept distinct from number.
Scalar = Union[str, int, float, bool, None]

# Ordered rows; the column set comes from the first row's keys.
Table = list[dict[str, Scalar]]


class ColumnType(str, Enum):
    """Semantic column type. STRING is the fallback."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    STRING = "string"


class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"
    AREA = "area"
    PIE = "pie"


@dataclass(frozen=True)
class ColumnProfile:
    """Derived metadata for one column.

    min/max/mean are populated only when type is NUMBER.
    """

    name: str
    type: ColumnType
    unique_values: int
    missing_values: int
    sample: list[Scalar]
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None

    @property
    def is_numeric(self) -> bool:
        return self.type == ColumnType.NUMBER

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "uniqueValues": self.unique_values,
            "missingValues": self.missing_values,
            "sample": list(self.sample),
        }
        if self.is_numeric:
            out["min"] = self.min
            out["max"] = self.max
            out["mean"] = self.mean
        return out


@dataclass(frozen=True)
class DatasetOverview:
    """Headline numbers for the summary cards."""

    row_count: int
    column_count: int
    numeric_columns: int
    string_columns: int
    missing_values: int
    completeness: float
    numeric_means: dict[str, float] = field(default_factory=dict)


class ChartConfig(BaseModel):
    type: ChartType = ChartType.BAR
    x_axis: str
    y_axis: list[str]
    title: str = ""


class AIReport(BaseModel):
    """
    Structured report returned by the LLM.

    The model is prompted for camelCase keys (keyInsights, markdownContent);
    both spellings validate.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    summary: str
    key_insights: list[str] = Field(default_factory=list, alias="keyInsights")
    recommendations: list[str] = Field(default_factory=list)
    markdown_content: str = Field("", alias="markdownContent")
