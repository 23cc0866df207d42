"""Search Query Performance (Brand Analytics) models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class TrendDirection(str, Enum):
    GROWING = "growing"
    DECLINING = "declining"
    STABLE = "stable"


class SearchQueryWeeklyRow(BaseModel):
    """One search query for one reporting period."""
    search_query: str = Field(alias="searchQuery")
    asin: str = ""
    search_query_volume: float = Field(default=0, alias="searchQueryVolume")
    search_query_score: float = Field(default=0, alias="searchQueryScore")
    click_share_total: float = Field(default=0.0, alias="clickShareTotal")
    click_share_asin: float = Field(default=0.0, alias="clickShareAsin")
    cart_add_share_total: float = Field(default=0.0, alias="cartAddShareTotal")
    cart_add_share_asin: float = Field(default=0.0, alias="cartAddShareAsin")
    purchase_share_total: float = Field(default=0.0, alias="purchaseShareTotal")
    purchase_share_asin: float = Field(default=0.0, alias="purchaseShareAsin")
    click_to_cart_total: float = Field(default=0.0, alias="clickToCartTotal")
    click_to_cart_asin: float = Field(default=0.0, alias="clickToCartAsin")
    click_to_purchase_total: float = Field(default=0.0, alias="clickToPurchaseTotal")
    click_to_purchase_asin: float = Field(default=0.0, alias="clickToPurchaseAsin")
    reporting_week: str = Field(default="", alias="reportingWeek")  # YYYY-MM-DD

    model_config = {"populate_by_name": True, "frozen": True}


class AggregatedSearchQuery(BaseModel):
    """All weeks of one (search query, ASIN), oldest week first."""
    search_query: str = Field(alias="searchQuery")
    asin: str = ""
    weeks: list[SearchQueryWeeklyRow] = Field(default_factory=list)
    avg_search_volume: float = Field(default=0.0, alias="avgSearchVolume")
    avg_click_share_asin: float = Field(default=0.0, alias="avgClickShareAsin")
    avg_purchase_share_asin: float = Field(default=0.0, alias="avgPurchaseShareAsin")
    avg_click_to_purchase_total: float = Field(default=0.0, alias="avgClickToPurchaseTotal")
    avg_click_to_purchase_asin: float = Field(default=0.0, alias="avgClickToPurchaseAsin")
    click_share_trend: TrendDirection = Field(default=TrendDirection.STABLE, alias="clickShareTrend")
    purchase_share_trend: TrendDirection = Field(default=TrendDirection.STABLE, alias="purchaseShareTrend")

    model_config = {"populate_by_name": True, "frozen": True}
