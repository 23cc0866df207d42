"""Analysis service: turn aggregated PPC and SQP data into recommendations."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from ppc_advisor.models.analysis import (
    ActionType,
    AnalysisResult,
    AnalysisSettings,
    Recommendation,
    Source,
)
from ppc_advisor.models.organic import OrganicRank
from ppc_advisor.models.ppc import AggregatedKeyword, MatchType
from ppc_advisor.models.sqp import AggregatedSearchQuery
from ppc_advisor.services.rules import (
    check_ad_opportunity,
    check_data_sufficiency,
    detect_trend_flags,
    evaluate_acos,
)

logger = logging.getLogger(__name__)


def run_analysis(
    ppc_keywords: list[AggregatedKeyword],
    sqp_queries: list[AggregatedSearchQuery],
    settings: AnalysisSettings,
    organic: Mapping[str, OrganicRank] | Iterable[OrganicRank] | None = None,
) -> AnalysisResult:
    """Build one recommendation per keyword seen in either data source.

    Keywords are matched across sources by lowercase text. PPC data decides
    the primary action; SQP data decides it only for queries without PPC
    data, and always contributes trend flags. Organic rank data is attached
    for reporting but does not change the action.

    Args:
        ppc_keywords: Output of ``aggregate_ppc_keywords``.
        sqp_queries: Output of ``aggregate_sqp_queries``.
        settings: ACOS target/threshold and click threshold. The caller must
            ensure ``acos_threshold >= acos_target``.
        organic: Optional organic ranks, either a lowercase-term mapping or
            a list of OrganicRank records.

    Returns:
        AnalysisResult with recommendations sorted by spend then search
        volume (both descending), and a count per action type.
    """
    ppc_index = {kw.keyword.lower(): kw for kw in ppc_keywords}
    sqp_index = {q.search_query.lower(): q for q in sqp_queries}
    organic_index = _index_organic(organic)

    # dict.fromkeys keeps PPC keywords first, then SQP-only queries
    all_keywords = dict.fromkeys([*ppc_index, *sqp_index])

    recommendations = [
        _build_recommendation(
            ppc_index.get(key),
            sqp_index.get(key),
            organic_index.get(key),
            ppc_index,
            settings,
        )
        for key in all_keywords
    ]
    recommendations.sort(
        key=lambda r: (r.spend or 0, r.avg_search_volume or 0),
        reverse=True,
    )

    summary = build_summary(recommendations)
    logger.info(
        "Analyzed %d keywords (%d PPC, %d SQP): %s",
        len(all_keywords),
        len(ppc_index),
        len(sqp_index),
        ", ".join(f"{action.value}={count}" for action, count in summary.items() if count),
    )

    return AnalysisResult(
        recommendations=recommendations,
        summary=summary,
        total_keywords=len(all_keywords),
        analyzed_at=datetime.now(timezone.utc),
    )


def build_summary(recommendations: Iterable[Recommendation]) -> dict[ActionType, int]:
    """Count recommendations per action, plus one per trend flag occurrence."""
    summary = {action: 0 for action in ActionType}
    for rec in recommendations:
        summary[rec.action] += 1
        for flag in rec.trend_flags:
            summary[flag] += 1
    return summary


def _index_organic(
    organic: Mapping[str, OrganicRank] | Iterable[OrganicRank] | None,
) -> Mapping[str, OrganicRank]:
    if organic is None:
        return {}
    if isinstance(organic, Mapping):
        return organic
    return {row.search_term.lower(): row for row in organic}


def _build_recommendation(
    ppc: AggregatedKeyword | None,
    sqp: AggregatedSearchQuery | None,
    organic: OrganicRank | None,
    ppc_index: Mapping[str, AggregatedKeyword],
    settings: AnalysisSettings,
) -> Recommendation:
    action = ActionType.NO_CHANGE
    suggested_bid: float | None = None
    reason = ""
    trend_flags: list[ActionType] = []

    if ppc and sqp:
        source = Source.BOTH
    elif ppc:
        source = Source.PPC
    else:
        source = Source.SQP

    if ppc:
        outcome = check_data_sufficiency(ppc, settings) or evaluate_acos(ppc, settings)
        action, reason, suggested_bid = outcome

    if sqp:
        if not ppc:
            opportunity = check_ad_opportunity(sqp, ppc_index)
            action = ActionType.START_ADS if opportunity.is_opportunity else ActionType.NO_CHANGE
            reason = opportunity.reason
        trend_flags = detect_trend_flags(sqp)

    return Recommendation(
        keyword=ppc.keyword if ppc else sqp.search_query,
        match_type=ppc.match_type if ppc else MatchType.EXACT,
        campaigns=list(ppc.campaigns) if ppc else [],
        action=action,
        trend_flags=trend_flags,
        current_acos=ppc.acos if ppc else None,
        current_bid=ppc.bid if ppc else None,
        suggested_bid=suggested_bid,
        clicks=ppc.clicks if ppc else None,
        spend=ppc.spend if ppc else None,
        sales=ppc.sales if ppc else None,
        orders=ppc.orders if ppc else None,
        conversion_rate=ppc.conversion_rate if ppc else None,
        avg_search_volume=sqp.avg_search_volume if sqp else None,
        avg_click_share_asin=sqp.avg_click_share_asin if sqp else None,
        avg_purchase_share_asin=sqp.avg_purchase_share_asin if sqp else None,
        click_to_purchase_asin=sqp.avg_click_to_purchase_asin if sqp else None,
        click_to_purchase_total=sqp.avg_click_to_purchase_total if sqp else None,
        organic_rank=organic.rank if organic else None,
        organic_search_volume=organic.search_volume if organic else None,
        reason=reason,
        source=source,
    )
