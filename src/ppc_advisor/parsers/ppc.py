"""Parsers for Sponsored Products bulk sheets and search term reports."""

from __future__ import annotations

import logging
from pathlib import Path

from ppc_advisor.models.ppc import KeywordPerformanceRow, MatchType
from ppc_advisor.parsers.tables import find_column, get_field, read_rows, safe_float, safe_int, to_records
from ppc_advisor.utils.numbers import round_cents, safe_div

logger = logging.getLogger(__name__)

BULK_SHEET_NAME = "Sponsored Products Campaigns"
SEARCH_TERMS_CAMPAIGN = "Search Terms Report"

_MATCH_TYPES = {m.value.lower(): m for m in MatchType}


def parse_match_type(value: str) -> MatchType:
    """Map a report match type to MatchType; anything unrecognised is Broad."""
    return _MATCH_TYPES.get(value.strip().lower(), MatchType.BROAD)


def parse_bulk_report(path: str | Path) -> list[KeywordPerformanceRow]:
    """Parse keyword rows from a Sponsored Products bulk file.

    Accepts the .xlsx bulk download (reads the "Sponsored Products Campaigns"
    sheet) or a CSV export of that sheet. Only ``Entity == Keyword`` rows are
    kept. An Excel file without the campaigns sheet is not a bulk report and
    yields an empty list.
    """
    rows = read_rows(path, sheet_name=BULK_SHEET_NAME)
    if rows is None:
        logger.info("%s has no %r sheet; skipping", path, BULK_SHEET_NAME)
        return []

    _, records = to_records(rows)
    parsed = []
    for rec in records:
        if get_field(rec, "Entity") != "Keyword":
            continue

        spend = safe_float(rec.get("Spend"))
        sales = safe_float(rec.get("Sales"))
        clicks = safe_int(rec.get("Clicks"))
        orders = safe_int(rec.get("Orders"))

        # Editable name columns are often blank; fall back to the informational copies
        parsed.append(KeywordPerformanceRow(
            campaign_name=get_field(rec, "Campaign Name", "Campaign Name (Informational only)"),
            ad_group_name=get_field(rec, "Ad Group Name", "Ad Group Name (Informational only)"),
            keyword=get_field(rec, "Keyword Text", "Keyword"),
            match_type=parse_match_type(get_field(rec, "Match Type")),
            state=get_field(rec, "State"),
            bid=safe_float(rec.get("Bid")),
            impressions=safe_int(rec.get("Impressions")),
            clicks=clicks,
            spend=spend,
            sales=sales,
            orders=orders,
            acos=round_cents(safe_div(spend, sales) * 100),
            cpc=round_cents(safe_div(spend, clicks)),
            conversion_rate=round_cents(safe_div(orders, clicks) * 100),
        ))

    logger.info("Parsed %d keyword rows from %s", len(parsed), path)
    return parsed


def parse_search_terms_report(path: str | Path) -> list[KeywordPerformanceRow]:
    """Parse a search term performance CSV into keyword rows.

    Columns look like "Clicks(Current period)". Every term becomes a Broad
    keyword of the pseudo-campaign "Search Terms Report" with no bid.
    """
    rows = read_rows(path)
    headers, records = to_records(rows or [])

    col_term = find_column(headers, r"^Search\s*terms?$") or "Search terms"
    col_clicks = find_column(headers, r"^Clicks\s*\(.*\)$") or "Clicks(Current period)"
    col_spend = find_column(headers, r"^Spend\s*\(.*\)$") or "Spend(Current period)"
    col_orders = find_column(headers, r"^Orders\s*\(.*\)$") or "Orders(Current period)"
    col_sales = find_column(headers, r"^Sales\s*\(.*\)$") or "Sales(Current period)"
    col_acos = find_column(headers, r"^ACOS\s*\(.*\)$") or "ACOS(Current period)"
    col_cvr = find_column(headers, r"^CVR\s*\(.*\)$") or "CVR(Current period)"

    parsed = []
    for rec in records:
        term = rec.get(col_term, "").strip()
        if not term or term == "--":
            continue

        clicks = safe_int(rec.get(col_clicks))
        spend = safe_float(rec.get(col_spend))

        parsed.append(KeywordPerformanceRow(
            campaign_name=SEARCH_TERMS_CAMPAIGN,
            keyword=term,
            match_type=MatchType.BROAD,
            state="enabled",
            clicks=clicks,
            spend=spend,
            sales=safe_float(rec.get(col_sales)),
            orders=safe_int(rec.get(col_orders)),
            acos=round_cents(_as_percent(rec.get(col_acos, ""))),
            cpc=round_cents(safe_div(spend, clicks)),
            conversion_rate=round_cents(_as_percent(rec.get(col_cvr, ""))),
        ))

    logger.info("Parsed %d search terms from %s", len(parsed), path)
    return parsed


def _as_percent(raw: str) -> float:
    """Read '25.00%' as 25 and a bare fraction like '0.25' as 25."""
    value = safe_float(raw)
    if 0 < value < 1 and "%" not in raw:
        return value * 100
    return value
