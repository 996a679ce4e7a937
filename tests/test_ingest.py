from __future__ import annotations

import io
from pathlib import Path

import pandas as pd
import pytest

from insightflow.errors import EmptyFileError, UnparseableFileError, UnsupportedFileTypeError
from insightflow.ingest import dataframe_to_table, parse_file
from insightflow.models import ColumnType
from insightflow.profile import profile_columns


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_csv_values_get_native_types(tmp_path: Path) -> None:
    csv_path = _write(
        tmp_path,
        "sample.csv",
        "amount,region,active,order_date\n"
        "1,West,true,2024-01-01\n"
        "2,,false,2024-02-01\n"
        "3,East,true,\n",
    )
    table = parse_file(csv_path)

    assert len(table) == 3
    assert list(table[0].keys()) == ["amount", "region", "active", "order_date"]
    assert table[0]["amount"] == 1 and isinstance(table[0]["amount"], int)
    assert table[0]["active"] is True
    assert table[1]["region"] is None
    assert table[2]["order_date"] is None

    types = {p.name: p.type for p in profile_columns(table)}
    assert types == {
        "amount": ColumnType.NUMBER,
        "region": ColumnType.STRING,
        "active": ColumnType.BOOLEAN,
        "order_date": ColumnType.DATE,
    }


def test_only_empty_cells_are_missing(tmp_path: Path) -> None:
    csv_path = _write(tmp_path, "na.csv", "code,label\n1,NA\n2,null\n3,\n")
    table = parse_file(csv_path)
    assert [row["label"] for row in table] == ["NA", "null", None]


def test_blank_lines_are_skipped(tmp_path: Path) -> None:
    csv_path = _write(tmp_path, "blank.csv", "a,b\n1,x\n\n2,y\n")
    assert len(parse_file(csv_path)) == 2


def test_file_like_upload_with_explicit_name() -> None:
    buf = io.BytesIO(b"x,y\n1,2\n3,4\n")
    table = parse_file(buf, filename="upload.csv")
    assert table == [{"x": 1, "y": 2}, {"x": 3, "y": 4}]


def test_excel_first_sheet(tmp_path: Path) -> None:
    xlsx_path = tmp_path / "book.xlsx"
    pd.DataFrame({"product": ["A", "B"], "units": [5, 7]}).to_excel(xlsx_path, index=False)
    table = parse_file(xlsx_path)
    assert table == [{"product": "A", "units": 5}, {"product": "B", "units": 7}]


def test_unsupported_extension_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path, "data.txt", "a,b\n1,2\n")
    with pytest.raises(UnsupportedFileTypeError):
        parse_file(path)


def test_header_only_csv_is_empty(tmp_path: Path) -> None:
    path = _write(tmp_path, "header.csv", "a,b\n")
    with pytest.raises(EmptyFileError):
        parse_file(path)


def test_zero_byte_csv_is_empty(tmp_path: Path) -> None:
    path = _write(tmp_path, "nothing.csv", "")
    with pytest.raises(EmptyFileError):
        parse_file(path)


def test_corrupt_excel_is_unparseable(tmp_path: Path) -> None:
    path = _write(tmp_path, "broken.xlsx", "this is not a workbook")
    with pytest.raises(UnparseableFileError):
        parse_file(path)


def test_dataframe_to_table_normalizes_cells() -> None:
    df = pd.DataFrame(
        {
            "ts": pd.to_datetime(["2024-01-01", None]),
            "f": [1.5, float("nan")],
        }
    )
    table = dataframe_to_table(df)
    assert table[0] == {"ts": "2024-01-01T00:00:00", "f": 1.5}
    assert table[1] == {"ts": None, "f": None}
