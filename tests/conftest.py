"""Shared fixtures and row factories for the ppc-advisor test suite."""
from __future__ import annotations

import pytest

from ppc_advisor.models.analysis import AnalysisSettings
from ppc_advisor.models.ppc import AggregatedKeyword, KeywordPerformanceRow, MatchType
from ppc_advisor.models.sqp import AggregatedSearchQuery, SearchQueryWeeklyRow


@pytest.fixture
def settings() -> AnalysisSettings:
    return AnalysisSettings(acos_target=25, acos_threshold=40, click_threshold=10)


def make_row(**overrides) -> KeywordPerformanceRow:
    values = {
        "campaign_name": "Campaign 1",
        "ad_group_name": "Ad Group 1",
        "keyword": "test keyword",
        "match_type": MatchType.EXACT,
        "state": "enabled",
        "bid": 1.0,
        "impressions": 100,
        "clicks": 10,
        "spend": 10.0,
        "sales": 100.0,
        "orders": 1,
        "acos": 10.0,
        "cpc": 1.0,
        "conversion_rate": 10.0,
    }
    values.update(overrides)
    return KeywordPerformanceRow(**values)


def make_keyword(**overrides) -> AggregatedKeyword:
    values = {
        "keyword": "test keyword",
        "match_type": MatchType.EXACT,
        "campaigns": ["Campaign 1"],
        "bid": 1.5,
        "impressions": 1000,
        "clicks": 100,
        "spend": 50.0,
        "sales": 200.0,
        "orders": 20,
        "acos": 25.0,
        "cpc": 0.5,
        "conversion_rate": 20.0,
    }
    values.update(overrides)
    return AggregatedKeyword(**values)


def make_week(**overrides) -> SearchQueryWeeklyRow:
    values = {
        "search_query": "test keyword",
        "asin": "B0TEST12345",
        "search_query_volume": 1000,
        "click_share_asin": 10.0,
        "purchase_share_asin": 10.0,
        "click_to_purchase_total": 5.0,
        "click_to_purchase_asin": 8.0,
        "reporting_week": "2026-01-05",
    }
    values.update(overrides)
    return SearchQueryWeeklyRow(**values)


def make_query(**overrides) -> AggregatedSearchQuery:
    values = {
        "search_query": "test keyword",
        "asin": "B0TEST12345",
        "weeks": [],
        "avg_search_volume": 5000,
        "avg_click_share_asin": 10,
        "avg_purchase_share_asin": 15,
        "avg_click_to_purchase_total": 5,
        "avg_click_to_purchase_asin": 8,
    }
    values.update(overrides)
    return AggregatedSearchQuery(**values)


def weekly_series(click_shares, purchase_shares=None, query="test keyword"):
    """Weeks with the given share series, one week apart, oldest first."""
    purchase_shares = purchase_shares or [10.0] * len(click_shares)
    return [
        make_week(
            search_query=query,
            click_share_asin=c,
            purchase_share_asin=p,
            reporting_week=f"2026-01-{i + 1:02d}",
        )
        for i, (c, p) in enumerate(zip(click_shares, purchase_shares))
    ]
