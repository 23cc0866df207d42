"""Tests for pydantic models — aliases, defaults and immutability."""
import pytest
from pydantic import ValidationError

from ppc_advisor.models.analysis import ActionType, AnalysisSettings, Recommendation, Source
from ppc_advisor.models.ppc import KeywordPerformanceRow, MatchType
from ppc_advisor.models.sqp import AggregatedSearchQuery, TrendDirection

from conftest import make_keyword


def test_row_accepts_camel_case_aliases():
    row = KeywordPerformanceRow(campaignName="C", keyword="k", matchType="Phrase", conversionRate=5)
    assert row.campaign_name == "C"
    assert row.match_type == MatchType.PHRASE
    assert row.conversion_rate == 5


def test_row_rejects_unknown_match_type():
    with pytest.raises(ValidationError):
        KeywordPerformanceRow(campaign_name="C", keyword="k", match_type="Negative")


def test_aggregated_keyword_frozen():
    kw = make_keyword()
    with pytest.raises(ValidationError):
        kw.spend = 1


def test_settings_defaults():
    s = AnalysisSettings()
    assert (s.acos_target, s.acos_threshold, s.click_threshold) == (25, 40, 10)


def test_settings_aliases():
    s = AnalysisSettings(acosTarget=20, acosThreshold=35, clickThreshold=5)
    assert s.acos_threshold == 35


def test_recommendation_dump_by_alias():
    rec = Recommendation(keyword="k", action=ActionType.NEGATE, source=Source.PPC, spend=3.0)
    dumped = rec.model_dump(by_alias=True, mode="json")
    assert dumped["action"] == "NEGATE"
    assert dumped["source"] == "ppc"
    assert dumped["trendFlags"] == []
    assert dumped["suggestedBid"] is None
    assert dumped["matchType"] == "Exact"


def test_recommendation_match_type_is_closed():
    rec = Recommendation(keyword="k", action=ActionType.NEGATE, source=Source.PPC, matchType="Phrase")
    assert rec.match_type == MatchType.PHRASE
    with pytest.raises(ValidationError):
        Recommendation(keyword="k", action=ActionType.NEGATE, source=Source.PPC, match_type="Negative")


def test_search_query_trend_defaults():
    q = AggregatedSearchQuery(search_query="q")
    assert q.click_share_trend == TrendDirection.STABLE
    assert q.weeks == []
