"""Wasted Ad Spend (WASP) report built from analysis recommendations."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ppc_advisor.models.analysis import ActionType, AnalysisSettings, Recommendation
from ppc_advisor.models.wasp import Severity, WASPCategory, WASPReport
from ppc_advisor.utils.numbers import safe_div

logger = logging.getLogger(__name__)

ORGANIC_TOP_RANK = 3


def compute_wasp_report(
    recommendations: Sequence[Recommendation],
    settings: AnalysisSettings,
) -> WASPReport:
    """Split ad spend into three waste categories.

    Categories are not mutually exclusive: a zero-conversion keyword that
    also ranks top 3 organically counts in both, so total waste can exceed
    the spend that is actually recoverable.
    """
    total_ad_spend = sum(_spend(r) for r in recommendations)

    zero_conv = [r for r in recommendations if r.orders == 0 and _spend(r) > 0]
    zero_conv_spend = sum(_spend(r) for r in zero_conv)

    high_acos = [r for r in recommendations if r.action == ActionType.LOWER_BID]
    high_acos_waste = sum(
        max(0.0, _spend(r) - (r.sales or 0) * settings.acos_target / 100)
        for r in high_acos
    )

    cannibalized = [
        r for r in recommendations
        if r.organic_rank is not None
        and r.organic_rank <= ORGANIC_TOP_RANK
        and _spend(r) > 0
    ]
    cannibalized_spend = sum(_spend(r) for r in cannibalized)

    categories = [
        WASPCategory(
            id="zero-conversion",
            label="Zero-Conversion Spend",
            description="Keywords with ad spend but zero orders. Budget spent with no return.",
            keyword_count=len(zero_conv),
            total_spend=zero_conv_spend,
            estimated_waste=zero_conv_spend,
            severity=Severity.HIGH if zero_conv_spend > 0 else Severity.LOW,
        ),
        WASPCategory(
            id="high-acos",
            label="High-ACOS Keywords",
            description=(
                f"Keywords with ACOS above your {settings.acos_target:g}% target. "
                "Overspending relative to sales."
            ),
            keyword_count=len(high_acos),
            total_spend=sum(_spend(r) for r in high_acos),
            estimated_waste=high_acos_waste,
            severity=Severity.MEDIUM if high_acos_waste > 0 else Severity.LOW,
        ),
        WASPCategory(
            id="organic-cannibalization",
            label="Organic Cannibalization",
            description=(
                "Keywords already ranking in the top 3 organically where ads are also "
                "running. You may be paying for clicks you'd get for free."
            ),
            keyword_count=len(cannibalized),
            total_spend=cannibalized_spend,
            estimated_waste=cannibalized_spend,
            severity=Severity.MEDIUM if cannibalized else Severity.LOW,
        ),
    ]

    total_waste = zero_conv_spend + high_acos_waste + cannibalized_spend
    logger.info("WASP: %.2f wasted of %.2f total ad spend", total_waste, total_ad_spend)

    return WASPReport(
        categories=categories,
        total_wasted_spend=total_waste,
        total_ad_spend=total_ad_spend,
        waste_percentage=safe_div(total_waste, total_ad_spend) * 100,
    )


def _spend(rec: Recommendation) -> float:
    return rec.spend or 0.0
