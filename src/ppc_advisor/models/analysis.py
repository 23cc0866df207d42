"""Analysis settings, recommendations and run results."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from ppc_advisor.models.ppc import MatchType


class ActionType(str, Enum):
    INCREASE_BID = "INCREASE_BID"
    LOWER_BID = "LOWER_BID"
    NEGATE = "NEGATE"
    NO_CHANGE = "NO_CHANGE"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    START_ADS = "START_ADS"
    # Trend flags share the enumeration so they can be counted in the summary
    REVIEW_PREVIEW = "REVIEW_PREVIEW"
    REVIEW_DETAIL_PAGE = "REVIEW_DETAIL_PAGE"


class Source(str, Enum):
    PPC = "ppc"
    SQP = "sqp"
    BOTH = "both"


class AnalysisSettings(BaseModel):
    """Thresholds the rules compare against.

    ``acos_threshold`` must not be below ``acos_target``; callers validate
    this before running an analysis (see ``config.validate_settings``).
    """
    acos_target: float = Field(default=25.0, alias="acosTarget")  # %, raise bids below this
    acos_threshold: float = Field(default=40.0, alias="acosThreshold")  # %, lower bids above this
    click_threshold: int = Field(default=10, alias="clickThreshold")

    model_config = {"populate_by_name": True, "frozen": True}


class Recommendation(BaseModel):
    """Action for one keyword, with the metrics that justified it."""
    keyword: str
    match_type: MatchType = Field(default=MatchType.EXACT, alias="matchType")
    campaigns: list[str] = Field(default_factory=list)
    action: ActionType
    trend_flags: list[ActionType] = Field(default_factory=list, alias="trendFlags")
    # PPC
    current_acos: float | None = Field(default=None, alias="currentAcos")
    current_bid: float | None = Field(default=None, alias="currentBid")
    suggested_bid: float | None = Field(default=None, alias="suggestedBid")
    clicks: int | None = None
    spend: float | None = None
    sales: float | None = None
    orders: int | None = None
    conversion_rate: float | None = Field(default=None, alias="conversionRate")
    # SQP
    avg_search_volume: float | None = Field(default=None, alias="avgSearchVolume")
    avg_click_share_asin: float | None = Field(default=None, alias="avgClickShareAsin")
    avg_purchase_share_asin: float | None = Field(default=None, alias="avgPurchaseShareAsin")
    click_to_purchase_asin: float | None = Field(default=None, alias="clickToPurchaseAsin")
    click_to_purchase_total: float | None = Field(default=None, alias="clickToPurchaseTotal")
    # Organic
    organic_rank: int | None = Field(default=None, alias="organicRank")
    organic_search_volume: float | None = Field(default=None, alias="organicSearchVolume")
    reason: str = ""
    source: Source

    model_config = {"populate_by_name": True, "frozen": True}


class AnalysisResult(BaseModel):
    recommendations: list[Recommendation] = Field(default_factory=list)
    summary: dict[ActionType, int] = Field(default_factory=dict)
    total_keywords: int = Field(default=0, alias="totalKeywords")
    analyzed_at: datetime = Field(alias="analyzedAt")

    model_config = {"populate_by_name": True, "frozen": True}
