"""Tests for services/rules.py — each rule in isolation."""
from ppc_advisor.models.analysis import ActionType, AnalysisSettings
from ppc_advisor.services.rules import (
    check_ad_opportunity,
    check_data_sufficiency,
    detect_trend_flags,
    evaluate_acos,
)

from conftest import make_keyword, make_query, weekly_series


# ── check_data_sufficiency ───────────────────────────────────────────

def test_below_click_threshold(settings):
    outcome = check_data_sufficiency(make_keyword(clicks=9), settings)
    assert outcome.action == ActionType.INSUFFICIENT_DATA
    assert "9 clicks" in outcome.reason
    assert outcome.suggested_bid is None


def test_at_click_threshold_is_sufficient(settings):
    assert check_data_sufficiency(make_keyword(clicks=10), settings) is None


# ── evaluate_acos ────────────────────────────────────────────────────

def test_no_orders_negate(settings):
    outcome = evaluate_acos(make_keyword(orders=0, sales=0, acos=0, clicks=42), settings)
    assert outcome.action == ActionType.NEGATE
    assert outcome.suggested_bid is None
    assert "42 clicks" in outcome.reason


def test_zero_acos_with_orders(settings):
    outcome = evaluate_acos(make_keyword(acos=0, spend=0, orders=3, bid=1.0), settings)
    assert outcome.action == ActionType.INCREASE_BID
    assert outcome.suggested_bid == 1.2


def test_below_target_scales_cpc_up(settings):
    outcome = evaluate_acos(make_keyword(acos=12.5, cpc=0.5), settings)
    assert outcome.action == ActionType.INCREASE_BID
    assert outcome.suggested_bid == 1.0
    assert "12.5%" in outcome.reason and "25%" in outcome.reason


def test_at_target_no_change(settings):
    assert evaluate_acos(make_keyword(acos=25), settings).action == ActionType.NO_CHANGE


def test_at_threshold_no_change(settings):
    assert evaluate_acos(make_keyword(acos=40), settings).action == ActionType.NO_CHANGE


def test_within_range_reason(settings):
    outcome = evaluate_acos(make_keyword(acos=35.37), settings)
    assert outcome.action == ActionType.NO_CHANGE
    assert outcome.suggested_bid is None
    assert "35.4%" in outcome.reason
    assert "25%-40%" in outcome.reason


def test_above_threshold_scales_cpc_down(settings):
    outcome = evaluate_acos(make_keyword(acos=80, cpc=1.0), settings)
    assert outcome.action == ActionType.LOWER_BID
    assert outcome.suggested_bid == 0.5
    assert "80.0%" in outcome.reason and "40%" in outcome.reason


def test_suggested_bid_rounded_to_cents(settings):
    outcome = evaluate_acos(make_keyword(acos=54.73, cpc=0.7), settings)
    assert outcome.suggested_bid == 0.51


def test_custom_settings():
    custom = AnalysisSettings(acos_target=10, acos_threshold=15, click_threshold=1)
    assert evaluate_acos(make_keyword(acos=20), custom).action == ActionType.LOWER_BID


# ── check_ad_opportunity ─────────────────────────────────────────────

def test_opportunity_when_asin_converts_better():
    outcome = check_ad_opportunity(
        make_query(avg_click_to_purchase_asin=8, avg_click_to_purchase_total=5), {},
    )
    assert outcome.is_opportunity is True
    assert "8.0%" in outcome.reason and "5.0%" in outcome.reason


def test_no_opportunity_when_market_converts_better():
    outcome = check_ad_opportunity(
        make_query(avg_click_to_purchase_asin=3, avg_click_to_purchase_total=5), {},
    )
    assert outcome.is_opportunity is False
    assert "does not exceed" in outcome.reason


def test_no_opportunity_when_equal():
    outcome = check_ad_opportunity(
        make_query(avg_click_to_purchase_asin=5, avg_click_to_purchase_total=5), {},
    )
    assert outcome.is_opportunity is False


def test_no_opportunity_when_already_advertised():
    outcome = check_ad_opportunity(
        make_query(search_query="Test Keyword"), {"test keyword": make_keyword()},
    )
    assert outcome.is_opportunity is False
    assert outcome.reason == "Already running ads for this query."


# ── detect_trend_flags ───────────────────────────────────────────────

def test_flags_need_three_weeks():
    assert detect_trend_flags(make_query(weeks=weekly_series([10, 5]))) == []


def test_click_share_decline_flags_preview():
    q = make_query(weeks=weekly_series([10, 8, 6]))
    assert detect_trend_flags(q) == [ActionType.REVIEW_PREVIEW]


def test_purchase_share_decline_flags_detail_page():
    q = make_query(weeks=weekly_series([5, 5, 5], [9, 7, 4]))
    assert detect_trend_flags(q) == [ActionType.REVIEW_DETAIL_PAGE]


def test_both_flags():
    q = make_query(weeks=weekly_series([10, 8, 6], [9, 7, 4]))
    assert detect_trend_flags(q) == [ActionType.REVIEW_PREVIEW, ActionType.REVIEW_DETAIL_PAGE]


def test_decline_run_later_in_series():
    q = make_query(weeks=weekly_series([4, 10, 8, 6, 7]))
    assert detect_trend_flags(q) == [ActionType.REVIEW_PREVIEW]


def test_no_flags_for_interrupted_decline():
    q = make_query(weeks=weekly_series([10, 8, 9, 7]))
    assert detect_trend_flags(q) == []
