"""Individual recommendation rules.

Each rule is a pure function over one aggregated record. The analysis
service applies them in priority order: data sufficiency, ACOS performance,
ad opportunity, then trend flags.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple

from ppc_advisor.models.analysis import ActionType, AnalysisSettings
from ppc_advisor.models.ppc import AggregatedKeyword
from ppc_advisor.models.sqp import AggregatedSearchQuery
from ppc_advisor.utils.numbers import round_cents
from ppc_advisor.utils.trends import MIN_TREND_POINTS, has_consecutive_decline

ZERO_ACOS_BID_MULTIPLIER = 1.2


class RuleOutcome(NamedTuple):
    action: ActionType
    reason: str
    suggested_bid: float | None = None


class OpportunityOutcome(NamedTuple):
    is_opportunity: bool
    reason: str


def check_data_sufficiency(
    kw: AggregatedKeyword,
    settings: AnalysisSettings,
) -> RuleOutcome | None:
    """Return INSUFFICIENT_DATA when the keyword has too few clicks, else None."""
    if kw.clicks < settings.click_threshold:
        return RuleOutcome(
            ActionType.INSUFFICIENT_DATA,
            f"Only {kw.clicks} clicks (threshold: {settings.click_threshold}). Need more data.",
        )
    return None


def evaluate_acos(kw: AggregatedKeyword, settings: AnalysisSettings) -> RuleOutcome:
    """Decide a bid action for a keyword with enough clicks.

    Priority order:
    1. No orders -> NEGATE
    2. ACOS 0% with orders (zero-cost conversions) -> INCREASE_BID at bid * 1.2
    3. ACOS below target -> INCREASE_BID, CPC scaled up by target / ACOS
    4. ACOS between target and threshold (inclusive) -> NO_CHANGE
    5. ACOS above threshold -> LOWER_BID, CPC scaled down by threshold / ACOS
    """
    target = settings.acos_target
    threshold = settings.acos_threshold

    if kw.orders == 0:
        return RuleOutcome(
            ActionType.NEGATE,
            f"No conversions after {kw.clicks} clicks. Consider negating.",
        )

    if kw.acos == 0:
        return RuleOutcome(
            ActionType.INCREASE_BID,
            f"ACOS is 0% with {kw.orders} orders. Increasing bid to capture more volume.",
            round_cents(kw.bid * ZERO_ACOS_BID_MULTIPLIER),
        )

    if kw.acos < target:
        return RuleOutcome(
            ActionType.INCREASE_BID,
            f"ACOS {kw.acos:.1f}% is below target {target:g}%. Room to increase bid.",
            round_cents(kw.cpc * (target / kw.acos)),
        )

    if kw.acos <= threshold:
        return RuleOutcome(
            ActionType.NO_CHANGE,
            f"ACOS {kw.acos:.1f}% within acceptable range ({target:g}%-{threshold:g}%).",
        )

    return RuleOutcome(
        ActionType.LOWER_BID,
        f"ACOS {kw.acos:.1f}% exceeds threshold {threshold:g}%. Lower bid to reduce spend.",
        round_cents(kw.cpc * (threshold / kw.acos)),
    )


def check_ad_opportunity(
    sqp: AggregatedSearchQuery,
    ppc_index: Mapping[str, AggregatedKeyword],
) -> OpportunityOutcome:
    """Check whether a search query is worth starting ads on.

    It is when no PPC keyword covers the query yet and the ASIN converts
    clicks to purchases better than the market does for that query.
    """
    has_active_ads = sqp.search_query.lower() in ppc_index
    asin_rate = sqp.avg_click_to_purchase_asin
    market_rate = sqp.avg_click_to_purchase_total

    if not has_active_ads and asin_rate > market_rate:
        return OpportunityOutcome(
            True,
            f"No active ads. ASIN conversion ({asin_rate:.1f}%) "
            f"exceeds market ({market_rate:.1f}%).",
        )

    if has_active_ads:
        return OpportunityOutcome(False, "Already running ads for this query.")
    return OpportunityOutcome(
        False,
        f"ASIN conversion ({asin_rate:.1f}%) does not exceed market ({market_rate:.1f}%).",
    )


def detect_trend_flags(sqp: AggregatedSearchQuery) -> list[ActionType]:
    """Flag queries whose ASIN share fell for 3+ consecutive weeks.

    Falling click share -> REVIEW_PREVIEW (image, title, price shown in search).
    Falling purchase share -> REVIEW_DETAIL_PAGE (listing conversion).
    """
    if len(sqp.weeks) < MIN_TREND_POINTS:
        return []

    flags: list[ActionType] = []
    if has_consecutive_decline([w.click_share_asin for w in sqp.weeks]):
        flags.append(ActionType.REVIEW_PREVIEW)
    if has_consecutive_decline([w.purchase_share_asin for w in sqp.weeks]):
        flags.append(ActionType.REVIEW_DETAIL_PAGE)
    return flags
