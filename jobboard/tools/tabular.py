"""
Row reader for bulk uploads (CSV or XLSX).

Spreadsheets come from admins and are messy: blank cells, numeric batch
years, real date cells or Excel serial numbers. Rows are returned as plain
dicts with blanks as None and everything else left for the row builders.
"""

from datetime import date, datetime, timedelta
from io import BytesIO
from pathlib import PurePath
from typing import Any

import pandas as pd

from jobboard.errors import ValidationError

CSV_EXTENSIONS = {".csv"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}

# Excel counts days from 1899-12-30 once its 1900 leap-year bug is accounted for.
EXCEL_EPOCH = datetime(1899, 12, 30)


def _clean(value: Any) -> Any:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, pd.Timestamp):
        return value.date().isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()[:10]
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def read_rows(filename: str, content: bytes) -> list[dict]:
    """
    Parse an uploaded sheet into row dicts (first sheet for workbooks).

    Raises:
        ValidationError: unsupported extension or unreadable file
    """
    suffix = PurePath(filename or "").suffix.lower()
    try:
        if suffix in CSV_EXTENSIONS:
            df = pd.read_csv(BytesIO(content), dtype=str, keep_default_na=False)
        elif suffix in EXCEL_EXTENSIONS:
            df = pd.read_excel(BytesIO(content), sheet_name=0)
        else:
            raise ValidationError("Only .csv and .xlsx files are supported")
    except (ValueError, pd.errors.ParserError) as e:
        raise ValidationError(f"Could not read {filename}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    records = df.astype(object).to_dict(orient="records")
    return [{k: _clean(v) for k, v in row.items()} for row in records]


def excel_date(value: Any) -> Any:
    """Convert an Excel serial day number to ``YYYY-MM-DD``; other values pass through."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return (EXCEL_EPOCH + timedelta(days=float(value))).date().isoformat()
    return value
