from __future__ import annotations

from insightflow.models import ColumnType
from insightflow.session import AnalysisSession


def test_load_replaces_previous_table() -> None:
    session = AnalysisSession()
    assert not session.is_loaded

    session.load([{"a": 1}, {"a": 2}], source_name="first.csv")
    session.insight = "old insight"
    assert session.row_count == 2
    assert [p.name for p in session.profiles] == ["a"]

    session.load([{"b": "x"}], source_name="second.csv")
    assert session.row_count == 1
    assert session.source_name == "second.csv"
    assert [(p.name, p.type) for p in session.profiles] == [("b", ColumnType.STRING)]
    assert session.insight == ""


def test_reset_clears_everything() -> None:
    session = AnalysisSession()
    session.load([{"a": 1}], source_name="data.csv")
    session.reset()
    assert not session.is_loaded
    assert session.profiles == []
    assert session.source_name is None


def test_overview_follows_current_table() -> None:
    session = AnalysisSession()
    session.load([{"a": 1, "b": None}, {"a": 3, "b": "x"}])
    ov = session.overview()
    assert ov.row_count == 2
    assert ov.missing_values == 1
    assert ov.numeric_means == {"a": 2.0}


def test_same_name_different_upload_is_not_current() -> None:
    session = AnalysisSession()
    assert not session.is_current("upload-1")

    session.load([{"a": 1}], source_name="sales.csv", source_id="upload-1")
    assert session.is_current("upload-1")
    # An edited file re-uploaded under the same name gets a new id.
    assert not session.is_current("upload-2")
    assert not session.is_current(None)

    session.load([{"a": 1}, {"a": 2}], source_name="sales.csv", source_id="upload-2")
    assert session.is_current("upload-2")
    assert session.row_count == 2

    session.reset()
    assert session.source_id is None
    assert not session.is_current("upload-2")


def test_load_profiles_without_waiting_for_insight() -> None:
    session = AnalysisSession()
    profiles = session.load([{"a": 1, "b": "x"}, {"a": 2, "b": "y"}], source_name="data.csv")
    assert [p.name for p in profiles] == ["a", "b"]
    assert session.profiles == profiles
    assert session.insight == ""
