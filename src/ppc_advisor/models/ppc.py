"""Sponsored Products keyword report models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class MatchType(str, Enum):
    BROAD = "Broad"
    PHRASE = "Phrase"
    EXACT = "Exact"


class KeywordPerformanceRow(BaseModel):
    """One keyword line from a PPC report, as parsed."""
    campaign_name: str = Field(alias="campaignName")
    ad_group_name: str = Field(default="", alias="adGroupName")
    keyword: str
    match_type: MatchType = Field(alias="matchType")
    state: str = ""
    bid: float = 0.0
    impressions: int = 0
    clicks: int = 0
    spend: float = 0.0
    sales: float = 0.0
    orders: int = 0
    acos: float = 0.0  # 0-100, as reported
    cpc: float = 0.0
    conversion_rate: float = Field(default=0.0, alias="conversionRate")  # 0-100, as reported

    model_config = {"populate_by_name": True, "frozen": True}


class AggregatedKeyword(BaseModel):
    """Fused view of every report row for one (keyword, match type).

    Rates are recomputed from the summed totals, never averaged.
    """
    keyword: str
    match_type: MatchType = Field(alias="matchType")
    campaigns: list[str] = Field(default_factory=list)
    bid: float = 0.0  # highest bid seen across reports
    impressions: int = 0
    clicks: int = 0
    spend: float = 0.0
    sales: float = 0.0
    orders: int = 0
    acos: float = 0.0
    cpc: float = 0.0
    conversion_rate: float = Field(default=0.0, alias="conversionRate")

    model_config = {"populate_by_name": True, "frozen": True}
