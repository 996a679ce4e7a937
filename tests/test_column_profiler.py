from __future__ import annotations

import math
from pathlib import Path

import pandas as pd
import pytest

from insightflow.ingest import parse_file
from insightflow.models import ColumnType
from insightflow.profile import infer_column_type, is_absent, profile_columns


def _by_name(profiles):
    return {p.name: p for p in profiles}


def test_mixed_table_scenario() -> None:
    table = [{"a": 1, "b": "x"}, {"a": 2, "b": ""}, {"a": 3, "b": "y"}]
    profiles = _by_name(profile_columns(table))

    a = profiles["a"]
    assert a.type == ColumnType.NUMBER
    assert a.missing_values == 0
    assert a.min == 1
    assert a.max == 3
    assert a.mean == pytest.approx(2.0)

    b = profiles["b"]
    assert b.type == ColumnType.STRING
    assert b.missing_values == 1
    assert b.unique_values == 2
    assert b.sample == ["x", "", "y"]
    assert b.min is None and b.max is None and b.mean is None


def test_empty_table_returns_no_profiles() -> None:
    assert profile_columns([]) == []


def test_date_strings_are_dates() -> None:
    [d] = profile_columns([{"d": "2024-01-01"}, {"d": "2024-02-01"}])
    assert d.type == ColumnType.DATE
    assert d.mean is None


def test_date_column_with_absent_values() -> None:
    [d] = profile_columns([{"d": "2024-01-01"}, {"d": ""}, {"d": None}])
    assert d.type == ColumnType.DATE
    assert d.missing_values == 2
    assert d.unique_values == 1
    assert d.sample == ["2024-01-01", "", None]


@pytest.mark.parametrize("word", ["now", "today", " Today "])
def test_relative_date_words_are_not_dates(word) -> None:
    assert infer_column_type([word]) == ColumnType.STRING
    assert infer_column_type(["2024-01-01", word]) == ColumnType.STRING


def test_excel_datetime_cells_profile_as_dates(tmp_path: Path) -> None:
    path = tmp_path / "orders.xlsx"
    frame = pd.DataFrame(
        {
            "ordered": pd.to_datetime(["2024-01-05", "2024-02-10", None]),
            "units": [3, 4, 5],
        }
    )
    frame.to_excel(path, index=False)

    profiles = _by_name(profile_columns(parse_file(path)))
    assert profiles["ordered"].type == ColumnType.DATE
    assert profiles["ordered"].missing_values == 1
    assert profiles["units"].type == ColumnType.NUMBER


def test_all_absent_column_defaults_to_string() -> None:
    table = [{"c": None}, {"c": ""}, {"c": None}]
    [c] = profile_columns(table)
    assert c.type == ColumnType.STRING
    assert c.missing_values == 3
    assert c.unique_values == 0
    assert c.min is None and c.max is None and c.mean is None


def test_one_bad_value_forces_string_fallback() -> None:
    values = ["1", "2", "3", "4", "oops"]
    [col] = profile_columns([{"v": v} for v in values])
    assert col.type == ColumnType.STRING


def test_numeric_text_is_not_reparsed_as_number() -> None:
    [col] = profile_columns([{"v": "10"}, {"v": "20"}])
    assert col.type == ColumnType.STRING
    assert col.mean is None


def test_numeric_date_like_text_is_not_a_date() -> None:
    [col] = profile_columns([{"v": "20240101"}, {"v": "20240201"}])
    assert col.type == ColumnType.STRING


def test_boolean_accepts_native_and_literal_text() -> None:
    [col] = profile_columns([{"f": True}, {"f": "false"}, {"f": False}, {"f": "true"}])
    assert col.type == ColumnType.BOOLEAN
    assert col.mean is None


def test_booleans_are_not_numbers() -> None:
    assert infer_column_type([True, False]) == ColumnType.BOOLEAN
    assert infer_column_type([1, True]) == ColumnType.STRING


def test_dates_mixed_with_numbers_fall_back_to_string() -> None:
    assert infer_column_type(["2024-01-01", 5]) == ColumnType.STRING


def test_precedence_number_before_anything_else() -> None:
    assert infer_column_type([1, 2.5, -3]) == ColumnType.NUMBER
    assert infer_column_type([]) == ColumnType.STRING


def test_uniqueness_uses_strict_equality() -> None:
    [col] = profile_columns([{"v": 1}, {"v": "1"}, {"v": True}, {"v": 1.0}])
    # 1 and 1.0 are the same number; "1" and True are distinct from it.
    assert col.unique_values == 3


def test_numeric_stats_bounds() -> None:
    [col] = profile_columns([{"n": v} for v in [5, -2.5, 10, 0, None]])
    assert col.type == ColumnType.NUMBER
    assert col.min == -2.5
    assert col.max == 10
    assert col.min <= col.mean <= col.max
    assert col.mean == pytest.approx(12.5 / 4)
    assert col.missing_values == 1


def test_nan_counts_as_absent() -> None:
    assert is_absent(float("nan"))
    assert is_absent(None)
    assert is_absent("")
    assert not is_absent(0)
    assert not is_absent(False)
    assert not is_absent(" ")

    [col] = profile_columns([{"n": math.nan}, {"n": 4.0}])
    assert col.type == ColumnType.NUMBER
    assert col.missing_values == 1
    assert col.mean == 4.0


def test_sample_is_verbatim_prefix() -> None:
    values = [None, 2, "", 4, 5, 6, 7]
    [col] = profile_columns([{"v": v} for v in values])
    assert col.sample == [None, 2, "", 4, 5]


def test_columns_follow_first_row_and_ragged_rows_count_as_absent() -> None:
    table = [{"a": 1, "b": 2}, {"a": 3}, {"a": 4, "c": 5}]
    profiles = profile_columns(table)
    assert [p.name for p in profiles] == ["a", "b"]
    b = profiles[1]
    assert b.missing_values == 2
    assert b.sample == [2, None, None]


@pytest.mark.parametrize(
    "table",
    [
        [{"a": 1, "b": "x"}, {"a": None, "b": ""}],
        [{"x": True, "y": "2024-01-01", "z": None}] * 4,
        [{"k": v} for v in [1, "1", "", None, 2.5, "text"]],
    ],
)
def test_missing_plus_defined_equals_row_count(table) -> None:
    for p in profile_columns(table):
        defined = [row.get(p.name) for row in table if not is_absent(row.get(p.name))]
        assert p.missing_values + len(defined) == len(table)
        assert (p.mean is not None) == (p.type == ColumnType.NUMBER)


def test_profiling_is_idempotent() -> None:
    table = [{"a": 1, "b": "x", "c": "2024-03-01"}, {"a": 7, "b": None, "c": "2024-03-02"}]
    assert profile_columns(table) == profile_columns(table)


def test_to_dict_uses_camel_case_and_omits_stats_for_non_numbers() -> None:
    a, b = profile_columns([{"a": 1, "b": "x"}, {"a": 3, "b": "y"}])
    assert a.to_dict() == {
        "name": "a",
        "type": "number",
        "uniqueValues": 2,
        "missingValues": 0,
        "sample": [1, 3],
        "min": 1,
        "max": 3,
        "mean": 2.0,
    }
    assert "mean" not in b.to_dict()
