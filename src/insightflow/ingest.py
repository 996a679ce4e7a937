from __future__ import annotations

import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

import numpy as np
import pandas as pd

from .errors import EmptyFileError, UnparseableFileError, UnsupportedFileTypeError
from .models import Scalar, Table

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = (".csv",)
EXCEL_EXTENSIONS = (".xlsx", ".xls")
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS + EXCEL_EXTENSIONS

Source = Union[str, Path, BinaryIO]


def _resolve_filename(source: Source, filename: Optional[str]) -> str:
    if filename:
        return filename
    if isinstance(source, (str, Path)):
        return str(source)
    # Streamlit's UploadedFile and open() handles both carry .name
    name = getattr(source, "name", None)
    return str(name) if name else ""


def _read_csv(source: Source) -> pd.DataFrame:
    """
    Read a CSV with dynamic typing.

    Only the empty cell is missing; tokens such as "NA" or "null" stay text.
    Columns made entirely of true/false become booleans.
    """
    return pd.read_csv(
        source,
        keep_default_na=False,
        na_values=[""],
        skip_blank_lines=True,
        true_values=["true", "True", "TRUE"],
        false_values=["false", "False", "FALSE"],
    )


def _read_excel(source: Source) -> pd.DataFrame:
    # First sheet only.
    return pd.read_excel(source, sheet_name=0)


def _to_scalar(value: Any) -> Scalar:
    """Convert a pandas cell to a plain Python scalar."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.isoformat()
    return str(value)


def dataframe_to_table(df: pd.DataFrame) -> Table:
    """Rows as dicts keyed by column name, in column order."""
    columns = [str(c) for c in df.columns]
    table: Table = []
    for record in df.astype(object).itertuples(index=False, name=None):
        table.append({col: _to_scalar(v) for col, v in zip(columns, record)})
    return table


def parse_file(source: Source, filename: Optional[str] = None) -> Table:
    """
    Parse an uploaded CSV or Excel file into a Table.

    Raises:
      UnsupportedFileTypeError: extension is not csv/xlsx/xls
      EmptyFileError: the file has no data rows
      UnparseableFileError: the underlying parser failed
    """
    name = _resolve_filename(source, filename)
    ext = Path(name).suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(name)

    try:
        df = _read_csv(source) if ext in CSV_EXTENSIONS else _read_excel(source)
    except pd.errors.EmptyDataError as e:
        raise EmptyFileError(f"{name} is empty or invalid") from e
    except Exception as e:  # noqa: BLE001
        raise UnparseableFileError(f"Could not parse {name}: {type(e).__name__}: {e}") from e

    if df.shape[0] == 0:
        raise EmptyFileError(f"{name} is empty or invalid")

    table = dataframe_to_table(df)
    logger.info("Parsed %s: %d rows x %d columns", Path(name).name, len(table), df.shape[1])
    return table
