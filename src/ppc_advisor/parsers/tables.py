"""Read CSV and XLSX report files into header-keyed records."""

from __future__ import annotations

import csv
import math
import re
import zipfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

EXCEL_SUFFIXES = (".xlsx", ".xlsm")


def read_rows(path: str | Path, sheet_name: str | None = None) -> list[list[str]] | None:
    """Read every row of a CSV file or an Excel sheet as lists of strings.

    For Excel files ``sheet_name`` selects the sheet (first sheet when None).
    Returns None when the requested sheet does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Report file not found: {path}")

    ext = path.suffix.lower()
    if ext == ".csv":
        with open(path, newline="", encoding="utf-8-sig") as f:
            return [row for row in csv.reader(f)]
    if ext in EXCEL_SUFFIXES:
        try:
            workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
        except (zipfile.BadZipFile, InvalidFileException, KeyError, OSError) as e:
            raise ValueError(f"Could not read Excel file {path}: {e}") from e
        try:
            if sheet_name is None:
                sheet = workbook.worksheets[0]
            elif sheet_name in workbook.sheetnames:
                sheet = workbook[sheet_name]
            else:
                return None
            return [
                ["" if cell is None else _cell_text(cell) for cell in row]
                for row in sheet.iter_rows(values_only=True)
            ]
        finally:
            workbook.close()
    raise ValueError(f"Unsupported file type: {ext}. Use .csv or .xlsx")


def to_records(
    rows: list[list[str]],
    is_header: Callable[[list[str]], bool] | None = None,
) -> tuple[list[str], list[dict[str, str]]]:
    """Turn raw rows into (headers, records) using the first matching header row.

    Rows above the header (report metadata) are skipped, as are blank rows.
    """
    header_index = 0
    if is_header is not None:
        for i, row in enumerate(rows):
            if is_header(row):
                header_index = i
                break
        else:
            return [], []
    if not rows:
        return [], []

    headers = [h.strip() for h in rows[header_index]]
    records = []
    for row in rows[header_index + 1:]:
        if not any(cell.strip() for cell in row):
            continue
        records.append({h: (row[i] if i < len(row) else "") for i, h in enumerate(headers)})
    return headers, records


def find_column(headers: list[str], pattern: str) -> str | None:
    """Return the first header matching a case-insensitive regex."""
    regex = re.compile(pattern, re.IGNORECASE)
    for h in headers:
        if regex.search(h):
            return h
    return None


def get_field(record: dict[str, str], *keys: str) -> str:
    """Get the first non-empty value among several possible column names."""
    for key in keys:
        val = record.get(key, "")
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return ""


def safe_float(value: Any, strip: str = "%,$") -> float:
    """Parse a report number; blanks, '--', junk and NaN/infinity become 0."""
    text = "" if value is None else str(value)
    for ch in strip:
        text = text.replace(ch, "")
    text = text.strip()
    if text in ("", "--", "-"):
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def safe_int(value: Any) -> int:
    return int(safe_float(value, strip=","))


def _cell_text(cell: Any) -> str:
    # Whole-number floats from Excel ("12.0") should read like the CSV export ("12")
    if isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    if isinstance(cell, datetime):
        return cell.date().isoformat()
    return str(cell)
