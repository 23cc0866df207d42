"""Merge keyword rows from several PPC reports into one record per keyword."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ppc_advisor.models.ppc import AggregatedKeyword, KeywordPerformanceRow, MatchType
from ppc_advisor.utils.numbers import safe_div

logger = logging.getLogger(__name__)


def aggregate_ppc_keywords(
    reports: Iterable[Iterable[KeywordPerformanceRow]],
) -> list[AggregatedKeyword]:
    """Aggregate PPC reports into unified keyword data.

    Rows are grouped by lowercase keyword text plus match type, so "Test" and
    "test" Exact merge while "test" Exact and "test" Broad stay apart.
    Additive metrics are summed and ACOS, CPC and conversion rate are
    recalculated from the totals; the rows' own rate fields are ignored.

    Args:
        reports: One list of rows per uploaded report, in upload order.

    Returns:
        One AggregatedKeyword per (keyword, match type), highest spend first.
    """
    groups: dict[tuple[str, MatchType], list[KeywordPerformanceRow]] = {}
    row_count = 0
    for report in reports:
        for row in report:
            key = (row.keyword.lower(), row.match_type)
            groups.setdefault(key, []).append(row)
            row_count += 1

    results = [_aggregate_group(rows) for rows in groups.values()]
    results.sort(key=lambda kw: kw.spend, reverse=True)

    logger.info("Aggregated %d PPC rows into %d keywords", row_count, len(results))
    return results


def _aggregate_group(rows: list[KeywordPerformanceRow]) -> AggregatedKeyword:
    # dict keeps first-seen order and drops duplicates
    campaigns = dict.fromkeys(row.campaign_name for row in rows)
    spend = sum(row.spend for row in rows)
    sales = sum(row.sales for row in rows)
    clicks = sum(row.clicks for row in rows)
    orders = sum(row.orders for row in rows)

    first = rows[0]
    return AggregatedKeyword(
        keyword=first.keyword,
        match_type=first.match_type,
        campaigns=list(campaigns),
        bid=max(row.bid for row in rows),
        impressions=sum(row.impressions for row in rows),
        clicks=clicks,
        spend=spend,
        sales=sales,
        orders=orders,
        acos=safe_div(spend, sales) * 100,
        cpc=safe_div(spend, clicks),
        conversion_rate=safe_div(orders, clicks) * 100,
    )
