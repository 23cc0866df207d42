"""Wasted Ad Spend (WASP) report models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WASPCategory(BaseModel):
    id: str
    label: str
    description: str
    keyword_count: int = Field(default=0, alias="keywordCount")
    total_spend: float = Field(default=0.0, alias="totalSpend")
    estimated_waste: float = Field(default=0.0, alias="estimatedWaste")
    severity: Severity = Severity.LOW

    model_config = {"populate_by_name": True, "frozen": True}


class WASPReport(BaseModel):
    categories: list[WASPCategory] = Field(default_factory=list)
    total_wasted_spend: float = Field(default=0.0, alias="totalWastedSpend")
    total_ad_spend: float = Field(default=0.0, alias="totalAdSpend")
    waste_percentage: float = Field(default=0.0, alias="wastePercentage")

    model_config = {"populate_by_name": True, "frozen": True}
