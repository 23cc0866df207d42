"""Tests for services/wasp.py — waste categories, severities and totals."""
import pytest

from ppc_advisor.models.analysis import ActionType, Recommendation, Source
from ppc_advisor.models.wasp import Severity
from ppc_advisor.services.wasp import compute_wasp_report


def _rec(action=ActionType.NO_CHANGE, spend=10.0, sales=50.0, orders=2, organic_rank=None):
    return Recommendation(
        keyword="kw", action=action, spend=spend, sales=sales, orders=orders,
        organic_rank=organic_rank, source=Source.PPC,
    )


def _category(report, category_id):
    return next(c for c in report.categories if c.id == category_id)


def test_fixed_category_order(settings):
    report = compute_wasp_report([], settings)
    assert [c.id for c in report.categories] == [
        "zero-conversion", "high-acos", "organic-cannibalization",
    ]


def test_empty_report_all_low(settings):
    report = compute_wasp_report([], settings)
    assert all(c.severity == Severity.LOW for c in report.categories)
    assert report.total_wasted_spend == 0
    assert report.waste_percentage == 0


def test_zero_conversion_only(settings):
    report = compute_wasp_report([_rec(action=ActionType.NEGATE, spend=10, sales=0, orders=0)], settings)
    zero = _category(report, "zero-conversion")
    assert zero.keyword_count == 1
    assert zero.estimated_waste == 10
    assert zero.severity == Severity.HIGH
    assert _category(report, "high-acos").estimated_waste == 0
    assert _category(report, "organic-cannibalization").keyword_count == 0
    assert report.total_wasted_spend == 10
    assert report.waste_percentage == 100


def test_zero_conversion_needs_spend(settings):
    report = compute_wasp_report([_rec(spend=0, orders=0)], settings)
    assert _category(report, "zero-conversion").keyword_count == 0


def test_sqp_only_recommendation_is_not_zero_conversion(settings):
    rec = Recommendation(keyword="q", action=ActionType.START_ADS, source=Source.SQP)
    report = compute_wasp_report([rec], settings)
    assert _category(report, "zero-conversion").keyword_count == 0
    assert report.total_ad_spend == 0


def test_high_acos_waste(settings):
    # spend 100, sales 200 at a 25% target justifies 50 of spend
    report = compute_wasp_report([_rec(action=ActionType.LOWER_BID, spend=100, sales=200)], settings)
    high = _category(report, "high-acos")
    assert high.estimated_waste == 50
    assert high.total_spend == 100
    assert high.severity == Severity.MEDIUM
    assert "25%" in high.description


def test_high_acos_waste_never_negative(settings):
    report = compute_wasp_report([_rec(action=ActionType.LOWER_BID, spend=10, sales=1000)], settings)
    high = _category(report, "high-acos")
    assert high.estimated_waste == 0
    assert high.severity == Severity.LOW
    assert high.keyword_count == 1


def test_organic_cannibalization(settings):
    recs = [_rec(organic_rank=3, spend=20), _rec(organic_rank=4, spend=30), _rec(organic_rank=1, spend=0)]
    organic = _category(compute_wasp_report(recs, settings), "organic-cannibalization")
    assert organic.keyword_count == 1
    assert organic.estimated_waste == 20
    assert organic.severity == Severity.MEDIUM


def test_categories_overlap(settings):
    """A zero-conversion keyword ranking top 3 organically counts twice."""
    rec = _rec(action=ActionType.NEGATE, spend=10, sales=0, orders=0, organic_rank=1)
    report = compute_wasp_report([rec], settings)
    assert report.total_wasted_spend == 20
    assert report.total_ad_spend == 10
    assert report.waste_percentage == 200


def test_waste_percentage(settings):
    recs = [_rec(action=ActionType.NEGATE, spend=25, sales=0, orders=0), _rec(spend=75)]
    report = compute_wasp_report(recs, settings)
    assert report.total_ad_spend == 100
    assert report.waste_percentage == pytest.approx(25)
