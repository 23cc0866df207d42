"""Organic ranking models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OrganicRank(BaseModel):
    """Organic search position of the product for one search term."""
    search_term: str = Field(alias="searchTerm")
    rank: int | None = None
    search_volume: float = Field(default=0.0, alias="searchVolume")

    model_config = {"populate_by_name": True, "frozen": True}
