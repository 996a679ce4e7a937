from __future__ import annotations

import math
import numbers
import warnings
from typing import Any, Iterable, Sequence

import pandas as pd

from ..models import ColumnProfile, ColumnType, Scalar, Table


SAMPLE_SIZE = 5

_BOOLEAN_LITERALS = ("true", "false")

# pandas resolves these against the clock; they are not calendar dates.
_RELATIVE_DATE_WORDS = frozenset({"now", "today"})


def is_absent(value: Any) -> bool:
    """None, the empty string and NaN all count as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def _is_number(value: Any) -> bool:
    # bool is an int subclass in Python; it is never a number here.
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool) or value in _BOOLEAN_LITERALS


def _looks_numeric(value: Any) -> bool:
    """True if the value reads as a plain number (booleans count as 1/0)."""
    if isinstance(value, (bool, numbers.Real)):
        return True
    if not isinstance(value, str):
        return False
    text = value.strip()
    if text == "":
        return True
    try:
        return not math.isnan(float(text))
    except ValueError:
        return False


def _parses_as_date(value: Any) -> bool:
    if str(value).strip().lower() in _RELATIVE_DATE_WORDS:
        return False
    try:
        # Pandas warns when it falls back to dateutil for a single element.
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            parsed = pd.to_datetime(str(value), errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return False
    return not pd.isna(parsed)


def _is_date(value: Any) -> bool:
    # Numeric text such as "20240101" would otherwise parse as a date.
    return not _looks_numeric(value) and _parses_as_date(value)


def infer_column_type(defined: Sequence[Scalar]) -> ColumnType:
    """
    Classify a column from its defined (non-absent) values.

    Precedence is number, boolean, date, string. Every value must conform
    for a type to win; a single outlier drops the column to STRING. Text is
    never re-parsed as a number.
    """
    if not defined:
        return ColumnType.STRING
    if all(_is_number(v) for v in defined):
        return ColumnType.NUMBER
    if all(_is_boolean(v) for v in defined):
        return ColumnType.BOOLEAN
    if all(_is_date(v) for v in defined):
        return ColumnType.DATE
    return ColumnType.STRING


def _equality_key(value: Any) -> tuple[str, Any]:
    # Keeps True apart from 1 and "1" apart from 1; 1 and 1.0 still collide.
    if isinstance(value, bool):
        return ("boolean", value)
    if _is_number(value):
        return ("number", value)
    if isinstance(value, str):
        return ("text", value)
    return (type(value).__name__, value)


def _count_unique(defined: Iterable[Scalar]) -> int:
    return len({_equality_key(v) for v in defined})


def _profile_column(name: str, values: list[Scalar], row_count: int) -> ColumnProfile:
    defined = [v for v in values if not is_absent(v)]
    col_type = infer_column_type(defined)

    stats: dict[str, Any] = {}
    if col_type == ColumnType.NUMBER:
        stats["min"] = min(defined)
        stats["max"] = max(defined)
        stats["mean"] = sum(defined) / len(defined)

    return ColumnProfile(
        name=name,
        type=col_type,
        unique_values=_count_unique(defined),
        missing_values=row_count - len(defined),
        sample=values[:SAMPLE_SIZE],
        **stats,
    )


def profile_columns(table: Table) -> list[ColumnProfile]:
    """
    Profile every column of an in-memory table.

    Columns are the first row's keys, in order. Keys that only appear in
    later rows are ignored; a key missing from a later row counts as absent
    for that row. An empty table yields an empty list.
    """
    if not table:
        return []

    row_count = len(table)
    profiles: list[ColumnProfile] = []
    for key in table[0].keys():
        values = [row.get(key) for row in table]
        profiles.append(_profile_column(key, values, row_count))
    return profiles
