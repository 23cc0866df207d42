"""Combine weekly Search Query Performance reports into per-query trends."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ppc_advisor.models.sqp import AggregatedSearchQuery, SearchQueryWeeklyRow
from ppc_advisor.utils.numbers import safe_div
from ppc_advisor.utils.trends import classify_trend

logger = logging.getLogger(__name__)


def aggregate_sqp_queries(
    reports: Iterable[Iterable[SearchQueryWeeklyRow]],
) -> list[AggregatedSearchQuery]:
    """Aggregate weekly SQP reports by search query and ASIN.

    Each group's weeks are sorted by reporting week (ISO date strings sort
    chronologically) before averages and trends are computed.

    Returns:
        One AggregatedSearchQuery per (query, ASIN), highest average search
        volume first.
    """
    groups: dict[tuple[str, str], list[SearchQueryWeeklyRow]] = {}
    for report in reports:
        for row in report:
            groups.setdefault((row.search_query.lower(), row.asin), []).append(row)

    results = [_aggregate_group(rows) for rows in groups.values()]
    results.sort(key=lambda q: q.avg_search_volume, reverse=True)

    logger.info("Aggregated SQP data into %d search queries", len(results))
    return results


def _aggregate_group(rows: list[SearchQueryWeeklyRow]) -> AggregatedSearchQuery:
    weeks = sorted(rows, key=lambda w: w.reporting_week)
    count = len(weeks)

    click_shares = [w.click_share_asin for w in weeks]
    purchase_shares = [w.purchase_share_asin for w in weeks]

    return AggregatedSearchQuery(
        search_query=weeks[0].search_query,
        asin=weeks[0].asin,
        weeks=weeks,
        avg_search_volume=safe_div(sum(w.search_query_volume for w in weeks), count),
        avg_click_share_asin=safe_div(sum(click_shares), count),
        avg_purchase_share_asin=safe_div(sum(purchase_shares), count),
        avg_click_to_purchase_total=safe_div(sum(w.click_to_purchase_total for w in weeks), count),
        avg_click_to_purchase_asin=safe_div(sum(w.click_to_purchase_asin for w in weeks), count),
        click_share_trend=classify_trend(click_shares),
        purchase_share_trend=classify_trend(purchase_shares),
    )
