"""Trend detection over ordered weekly series."""

from __future__ import annotations

from collections.abc import Sequence

from ppc_advisor.models.sqp import TrendDirection

MIN_TREND_POINTS = 3


def classify_trend(series: Sequence[float]) -> TrendDirection:
    """Classify the direction of a whole series.

    The series must move strictly in one direction at every step to count as
    growing or declining. Any flat or reversing step, or fewer than 3 points,
    yields STABLE.
    """
    if len(series) < MIN_TREND_POINTS:
        return TrendDirection.STABLE

    growing = True
    declining = True
    for prev, curr in zip(series, series[1:]):
        if curr <= prev:
            growing = False
        if curr >= prev:
            declining = False

    if growing:
        return TrendDirection.GROWING
    if declining:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


def has_consecutive_decline(series: Sequence[float], run: int = 2) -> bool:
    """Return True if ``run`` strict declines happen back to back anywhere.

    With the default run of 2 this means 3 consecutive strictly decreasing
    points, e.g. [5, 9, 7, 4] -> True, [9, 7, 8, 6] -> False.
    """
    if len(series) < run + 1:
        return False

    streak = 0
    for prev, curr in zip(series, series[1:]):
        if curr < prev:
            streak += 1
            if streak >= run:
                return True
        else:
            streak = 0
    return False
