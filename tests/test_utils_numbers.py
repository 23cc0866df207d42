"""Tests for utils/numbers.py — safe division, cent rounding, display formats."""
import math

from ppc_advisor.utils.numbers import fmt_currency, fmt_pct, round_cents, safe_div


# ── safe_div ─────────────────────────────────────────────────────────

def test_safe_div_normal():
    assert safe_div(10, 4) == 2.5


def test_safe_div_zero_denominator():
    assert safe_div(10, 0) == 0


def test_safe_div_zero_over_zero():
    assert safe_div(0, 0) == 0


def test_safe_div_never_infinite():
    assert not math.isinf(safe_div(1e308, 0))


# ── round_cents ──────────────────────────────────────────────────────

def test_round_cents_basic():
    assert round_cents(1.234) == 1.23


def test_round_cents_half_up():
    assert round_cents(0.125) == 0.13


def test_round_cents_float_artifact():
    """1.005 is stored as 1.00499..., but still rounds up at the cent boundary."""
    assert round_cents(1.005) == 1.01


def test_round_cents_negative_half_away_from_zero():
    assert round_cents(-0.125) == -0.13


def test_round_cents_integer():
    assert round_cents(3) == 3.0


# ── formatting ───────────────────────────────────────────────────────

def test_fmt_pct():
    assert fmt_pct(12.5) == "12.50%"


def test_fmt_pct_none():
    assert fmt_pct(None) == "—"


def test_fmt_currency():
    assert fmt_currency(1.2) == "$1.20"


def test_fmt_currency_nan():
    assert fmt_currency(float("nan")) == "—"
