"""Parser for organic rank tracker exports."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path

from ppc_advisor.models.organic import OrganicRank
from ppc_advisor.parsers.tables import find_column, read_rows, safe_float, to_records

logger = logging.getLogger(__name__)

_NON_DATE_COLUMNS = {"search terms", "search term", "median rank", "search volume", "aggregate"}
_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%b %d %Y", "%b %d, %Y", "%d %b %Y")


def _parse_date(text: str) -> date | None:
    text = text.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def find_latest_date_column(headers: list[str]) -> str | None:
    """Return the header of the most recent dated rank column, if any."""
    dated = []
    for h in headers:
        if h.strip().lower() in _NON_DATE_COLUMNS:
            continue
        d = _parse_date(h)
        if d is not None:
            dated.append((d, h))
    if not dated:
        return None
    return max(dated)[1]


def _nullable_rank(raw: str | None) -> int | None:
    if raw is None or raw.strip() in ("", "-", "--"):
        return None
    try:
        return round(float(raw.replace(",", "").strip()))
    except ValueError:
        return None


def parse_organic_report(path: str | Path) -> list[OrganicRank]:
    """Parse organic ranks (CSV or first sheet of an .xlsx).

    The rank comes from the latest dated column, falling back to the median
    rank when that week has no position. The AGGREGATE summary row is skipped.

    Raises:
        ValueError: If there is no "Search Terms" column.
    """
    headers, records = to_records(read_rows(path) or [])

    col_term = find_column(headers, r"^Search\s*Terms?$")
    if not col_term:
        raise ValueError(f'Could not find "Search Terms" column in organic ranking file {path}')
    col_median = find_column(headers, r"^Median\s*Rank$")
    col_volume = find_column(headers, r"^Search\s*Volume$")
    col_latest = find_latest_date_column(headers)

    parsed = []
    for rec in records:
        term = rec.get(col_term, "").strip()
        if not term or term.upper() == "AGGREGATE":
            continue

        latest = _nullable_rank(rec.get(col_latest)) if col_latest else None
        median = _nullable_rank(rec.get(col_median)) if col_median else None
        parsed.append(OrganicRank(
            search_term=term,
            rank=latest if latest is not None else median,
            search_volume=safe_float(rec.get(col_volume), strip=",") if col_volume else 0.0,
        ))

    logger.info("Parsed %d organic ranks from %s", len(parsed), path)
    return parsed


def index_organic(rows: list[OrganicRank]) -> dict[str, OrganicRank]:
    """Key organic ranks by lowercase search term for the analysis service."""
    return {row.search_term.lower(): row for row in rows}
