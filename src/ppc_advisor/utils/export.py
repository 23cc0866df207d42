"""CSV export of analysis recommendations and WASP reports."""

from __future__ import annotations

import csv
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from ppc_advisor.models.analysis import Recommendation
from ppc_advisor.models.wasp import WASPReport
from ppc_advisor.utils.numbers import fmt_currency, fmt_pct

RECOMMENDATION_COLUMNS = [
    "Keyword",
    "Match Type",
    "Campaigns",
    "Action",
    "Trend Flags",
    "Current ACOS",
    "Current Bid",
    "Suggested Bid",
    "Clicks",
    "Spend",
    "Sales",
    "Orders",
    "Conv Rate",
    "Avg Search Volume",
    "Click Share (ASIN)",
    "Purchase Share (ASIN)",
    "Organic Rank",
    "Organic Search Vol",
    "Source",
    "Reason",
]

WASP_COLUMNS = [
    "Category",
    "Description",
    "Keywords",
    "Total Spend",
    "Estimated Waste",
    "Severity",
]


def _num(value: float | int | None) -> str:
    return "" if value is None else f"{value:g}"


def recommendations_to_rows(recommendations: Sequence[Recommendation]) -> list[dict[str, str]]:
    """Flatten recommendations into display-formatted CSV rows."""
    return [
        {
            "Keyword": rec.keyword,
            "Match Type": rec.match_type.value,
            "Campaigns": "; ".join(rec.campaigns),
            "Action": rec.action.value,
            "Trend Flags": "; ".join(flag.value for flag in rec.trend_flags),
            "Current ACOS": fmt_pct(rec.current_acos),
            "Current Bid": fmt_currency(rec.current_bid),
            "Suggested Bid": fmt_currency(rec.suggested_bid),
            "Clicks": _num(rec.clicks),
            "Spend": fmt_currency(rec.spend),
            "Sales": fmt_currency(rec.sales),
            "Orders": _num(rec.orders),
            "Conv Rate": fmt_pct(rec.conversion_rate),
            "Avg Search Volume": _num(rec.avg_search_volume),
            "Click Share (ASIN)": fmt_pct(rec.avg_click_share_asin),
            "Purchase Share (ASIN)": fmt_pct(rec.avg_purchase_share_asin),
            "Organic Rank": _num(rec.organic_rank),
            "Organic Search Vol": _num(rec.organic_search_volume),
            "Source": rec.source.value,
            "Reason": rec.reason,
        }
        for rec in recommendations
    ]


def wasp_to_rows(report: WASPReport) -> list[dict[str, str]]:
    """Summary row followed by one row per WASP category."""
    summary = {
        "Category": "SUMMARY",
        "Description": (
            f"Total Ad Spend: {fmt_currency(report.total_ad_spend)} | "
            f"Total Waste: {fmt_currency(report.total_wasted_spend)} | "
            f"Waste %: {fmt_pct(report.waste_percentage)}"
        ),
        "Keywords": "",
        "Total Spend": fmt_currency(report.total_ad_spend),
        "Estimated Waste": fmt_currency(report.total_wasted_spend),
        "Severity": "",
    }
    rows = [summary]
    for cat in report.categories:
        rows.append({
            "Category": cat.label,
            "Description": cat.description,
            "Keywords": str(cat.keyword_count),
            "Total Spend": fmt_currency(cat.total_spend),
            "Estimated Waste": fmt_currency(cat.estimated_waste),
            "Severity": cat.severity.value.upper(),
        })
    return rows


def _write_csv(path: Path, columns: list[str], rows: list[dict[str, str]]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)


def export_recommendations_csv(
    recommendations: Sequence[Recommendation],
    export_dir: str = "./exports",
) -> str:
    """Write recommendations to ``ppc-analysis-<date>.csv`` and return the path."""
    dir_path = Path(export_dir)
    dir_path.mkdir(parents=True, exist_ok=True)

    path = dir_path / f"ppc-analysis-{date.today().isoformat()}.csv"
    _write_csv(path, RECOMMENDATION_COLUMNS, recommendations_to_rows(recommendations))
    return str(path)


def export_wasp_csv(report: WASPReport, export_dir: str = "./exports") -> str:
    """Write the WASP report to ``wasp-report-<date>.csv`` and return the path."""
    dir_path = Path(export_dir)
    dir_path.mkdir(parents=True, exist_ok=True)

    path = dir_path / f"wasp-report-{date.today().isoformat()}.csv"
    _write_csv(path, WASP_COLUMNS, wasp_to_rows(report))
    return str(path)
