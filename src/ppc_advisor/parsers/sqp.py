"""Parser for Brand Analytics Search Query Performance reports."""

from __future__ import annotations

import logging
from pathlib import Path

from ppc_advisor.models.sqp import SearchQueryWeeklyRow
from ppc_advisor.parsers.tables import find_column, read_rows, safe_float, safe_int, to_records
from ppc_advisor.utils.numbers import round_cents, safe_div

logger = logging.getLogger(__name__)

# Two layouts exist: "Clicks: Total Count" / "Clicks: Brand Count" (brand view)
# and "Click Share - Total Count" / "Click Share - ASIN Count" (ASIN view).
_COLUMN_PATTERNS = {
    "clicks_total": [r"Clicks?[:\s].*Total\s*Count", r"Click Share.*Total\s*Count"],
    "clicks_asin": [r"Clicks?[:\s].*Brand\s*Count", r"Clicks?[:\s].*Brand\s*Share", r"Click Share.*(#\d+|Brand|ASIN)"],
    "cart_total": [r"Cart Adds?[:\s].*Total\s*Count", r"Cart Add Share.*Total\s*Count"],
    "cart_asin": [r"Cart Adds?[:\s].*Brand\s*Count", r"Cart Adds?[:\s].*Brand\s*Share", r"Cart Add Share.*(#\d+|Brand|ASIN)"],
    "purchases_total": [r"Purchases?[:\s].*Total\s*Count", r"Purchase Share.*Total\s*Count"],
    "purchases_asin": [r"Purchases?[:\s].*Brand\s*Count", r"Purchases?[:\s].*Brand\s*Share", r"Purchase Share.*(#\d+|Brand|ASIN)"],
    "volume": [r"Search Query Volume"],
    "score": [r"Search Query Score"],
    "week": [r"Reporting\s*Date"],
}


def _is_header(row: list[str]) -> bool:
    return bool(row) and row[0].strip().strip('"').startswith("Search Query")


def _resolve_columns(headers: list[str]) -> dict[str, str | None]:
    columns: dict[str, str | None] = {}
    for name, patterns in _COLUMN_PATTERNS.items():
        columns[name] = next(
            (col for col in (find_column(headers, p) for p in patterns) if col),
            None,
        )
    return columns


def parse_sqp_report(path: str | Path, asin: str = "") -> list[SearchQueryWeeklyRow]:
    """Parse an SQP report (CSV or first sheet of an .xlsx).

    Metadata lines above the "Search Query" header row are skipped.
    Conversion rates are derived from the counts (purchases / clicks etc.).

    Args:
        path: Report file.
        asin: Product id to stamp on every row; brand-level reports carry none.

    Raises:
        ValueError: If no header row starting with "Search Query" is found.
    """
    rows = read_rows(path) or []
    headers, records = to_records(rows, is_header=_is_header)
    if not headers:
        raise ValueError(f'Could not find header row starting with "Search Query" in {path}')

    cols = _resolve_columns(headers)

    def value(rec: dict[str, str], name: str) -> float:
        col = cols[name]
        return safe_float(rec.get(col)) if col else 0.0

    parsed = []
    for rec in records:
        query = rec.get(headers[0], "").strip()
        if not query:
            continue

        clicks_total = value(rec, "clicks_total")
        clicks_asin = value(rec, "clicks_asin")
        cart_total = value(rec, "cart_total")
        cart_asin = value(rec, "cart_asin")
        purchases_total = value(rec, "purchases_total")
        purchases_asin = value(rec, "purchases_asin")

        parsed.append(SearchQueryWeeklyRow(
            search_query=query,
            asin=asin,
            search_query_volume=safe_int(rec.get(cols["volume"])) if cols["volume"] else 0,
            search_query_score=safe_int(rec.get(cols["score"])) if cols["score"] else 0,
            click_share_total=clicks_total,
            click_share_asin=clicks_asin,
            cart_add_share_total=cart_total,
            cart_add_share_asin=cart_asin,
            purchase_share_total=purchases_total,
            purchase_share_asin=purchases_asin,
            click_to_cart_total=round_cents(safe_div(cart_total, clicks_total) * 100),
            click_to_cart_asin=round_cents(safe_div(cart_asin, clicks_asin) * 100),
            click_to_purchase_total=round_cents(safe_div(purchases_total, clicks_total) * 100),
            click_to_purchase_asin=round_cents(safe_div(purchases_asin, clicks_asin) * 100),
            reporting_week=rec.get(cols["week"], "").strip() if cols["week"] else "",
        ))

    logger.info("Parsed %d SQP rows from %s", len(parsed), path)
    return parsed
