"""CLI commands for keyword analysis and wasted spend reports."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from ppc_advisor.config import Settings, get_config, validate_settings
from ppc_advisor.models.analysis import ActionType, AnalysisResult, AnalysisSettings
from ppc_advisor.models.organic import OrganicRank
from ppc_advisor.models.ppc import KeywordPerformanceRow
from ppc_advisor.models.sqp import SearchQueryWeeklyRow
from ppc_advisor.parsers.organic import index_organic, parse_organic_report
from ppc_advisor.parsers.ppc import parse_bulk_report, parse_search_terms_report
from ppc_advisor.parsers.sqp import parse_sqp_report
from ppc_advisor.services.analysis import run_analysis
from ppc_advisor.services.ppc_aggregator import aggregate_ppc_keywords
from ppc_advisor.services.sqp_aggregator import aggregate_sqp_queries
from ppc_advisor.services.wasp import compute_wasp_report
from ppc_advisor.utils.errors import handle_error
from ppc_advisor.utils.export import export_recommendations_csv, export_wasp_csv, wasp_to_rows
from ppc_advisor.utils.output import OutputFormat, print_json, print_output

console = Console(stderr=True)
app = typer.Typer(name="analyze", help="Bid recommendations and wasted spend from report files.")

RECOMMENDATION_COLUMNS = [
    "keyword", "matchType", "action", "trendFlags", "currentAcos",
    "currentBid", "suggestedBid", "clicks", "spend", "avgSearchVolume",
    "organicRank", "source", "reason",
]

PpcOpt = Annotated[list[Path] | None, typer.Option("--ppc", help="Sponsored Products bulk file (.xlsx/.csv), repeatable")]
SearchTermsOpt = Annotated[list[Path] | None, typer.Option("--search-terms", help="Search term report (.csv), repeatable")]
SqpOpt = Annotated[list[Path] | None, typer.Option("--sqp", help="Search Query Performance report (.csv/.xlsx), repeatable")]
OrganicOpt = Annotated[list[Path] | None, typer.Option("--organic", help="Organic rank export (.csv/.xlsx), repeatable")]
AsinOpt = Annotated[str, typer.Option("--asin", help="ASIN to stamp on SQP rows")]
TargetOpt = Annotated[float | None, typer.Option("--acos-target", help="ACOS % below which bids are raised")]
ThresholdOpt = Annotated[float | None, typer.Option("--acos-threshold", help="ACOS % above which bids are lowered")]
ClicksOpt = Annotated[int | None, typer.Option("--click-threshold", help="Minimum clicks before acting on PPC data")]


def _resolve_settings(
    acos_target: float | None,
    acos_threshold: float | None,
    click_threshold: int | None,
) -> tuple[Settings, AnalysisSettings]:
    """Apply CLI overrides on top of the configured settings and validate them."""
    config = get_config()
    base = config.to_analysis_settings()
    settings = AnalysisSettings(
        acos_target=base.acos_target if acos_target is None else acos_target,
        acos_threshold=base.acos_threshold if acos_threshold is None else acos_threshold,
        click_threshold=base.click_threshold if click_threshold is None else click_threshold,
    )
    return config, validate_settings(settings)


def _load_reports(
    ppc: list[Path] | None,
    search_terms: list[Path] | None,
    sqp: list[Path] | None,
    organic: list[Path] | None,
    asin: str,
) -> tuple[list[list[KeywordPerformanceRow]], list[list[SearchQueryWeeklyRow]], list[OrganicRank]]:
    """Parse every file; each file is one report batch."""
    if not (ppc or search_terms or sqp):
        raise ValueError("No reports given. Pass at least one of --ppc, --search-terms or --sqp")

    ppc_reports = [parse_bulk_report(p) for p in ppc or []]
    ppc_reports += [parse_search_terms_report(p) for p in search_terms or []]
    sqp_reports = [parse_sqp_report(p, asin=asin) for p in sqp or []]

    organic_rows: list[OrganicRank] = []
    for path in organic or []:
        organic_rows.extend(parse_organic_report(path))

    return ppc_reports, sqp_reports, organic_rows


def _analyze(
    ppc: list[Path] | None,
    search_terms: list[Path] | None,
    sqp: list[Path] | None,
    organic: list[Path] | None,
    asin: str,
    acos_target: float | None,
    acos_threshold: float | None,
    click_threshold: int | None,
) -> tuple[Settings, AnalysisSettings, AnalysisResult]:
    config, settings = _resolve_settings(acos_target, acos_threshold, click_threshold)
    ppc_reports, sqp_reports, organic_rows = _load_reports(ppc, search_terms, sqp, organic, asin)

    console.print(
        f"Analyzing {len(ppc_reports)} PPC and {len(sqp_reports)} SQP reports "
        f"(ACOS target {settings.acos_target:g}%, threshold {settings.acos_threshold:g}%, "
        f"min clicks {settings.click_threshold})..."
    )
    result = run_analysis(
        aggregate_ppc_keywords(ppc_reports),
        aggregate_sqp_queries(sqp_reports),
        settings,
        organic=index_organic(organic_rows),
    )
    return config, settings, result


@app.command("run")
def analyze_run(
    ppc: PpcOpt = None,
    search_terms: SearchTermsOpt = None,
    sqp: SqpOpt = None,
    organic: OrganicOpt = None,
    asin: AsinOpt = "",
    acos_target: TargetOpt = None,
    acos_threshold: ThresholdOpt = None,
    click_threshold: ClicksOpt = None,
    action: Annotated[list[ActionType] | None, typer.Option("--action", "-a", help="Only show these actions/flags")] = None,
    export: Annotated[bool, typer.Option("--export", help="Also write CSV exports to the export directory")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
) -> None:
    """Recommend a bid action for every keyword in the given reports.

    PPC reports decide INCREASE_BID / LOWER_BID / NEGATE / NO_CHANGE /
    INSUFFICIENT_DATA. SQP-only queries get START_ADS or NO_CHANGE, and any
    query with 3+ weeks of falling share is flagged for review.
    """
    try:
        config, settings, result = _analyze(
            ppc, search_terms, sqp, organic, asin, acos_target, acos_threshold, click_threshold,
        )
    except (ValueError, FileNotFoundError) as e:
        handle_error(e)
        raise typer.Exit(1)

    recommendations = result.recommendations
    if action:
        wanted = set(action)
        recommendations = [
            r for r in recommendations
            if r.action in wanted or wanted.intersection(r.trend_flags)
        ]

    if output == OutputFormat.JSON:
        data = result.model_dump(by_alias=True, mode="json")
        data["recommendations"] = [r.model_dump(by_alias=True, mode="json") for r in recommendations]
        print_json(data)
    else:
        rows = [r.model_dump(by_alias=True, mode="json") for r in recommendations]
        print_output(rows, output, columns=RECOMMENDATION_COLUMNS, title="Keyword Recommendations")
        counts = ", ".join(f"{a.value}={n}" for a, n in result.summary.items() if n)
        console.print(f"\n[dim]{result.total_keywords} keywords analyzed. {counts}[/dim]")

    if export:
        rec_path = export_recommendations_csv(recommendations, config.export_dir)
        wasp_path = export_wasp_csv(compute_wasp_report(result.recommendations, settings), config.export_dir)
        console.print(f"[green]Exported[/green] {rec_path} and {wasp_path}")


@app.command("wasp")
def analyze_wasp(
    ppc: PpcOpt = None,
    search_terms: SearchTermsOpt = None,
    sqp: SqpOpt = None,
    organic: OrganicOpt = None,
    asin: AsinOpt = "",
    acos_target: TargetOpt = None,
    acos_threshold: ThresholdOpt = None,
    click_threshold: ClicksOpt = None,
    export: Annotated[bool, typer.Option("--export", help="Also write the report as CSV")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
) -> None:
    """Break ad spend down into wasted-spend categories.

    Categories overlap, so total waste can exceed recoverable spend.
    """
    try:
        config, settings, result = _analyze(
            ppc, search_terms, sqp, organic, asin, acos_target, acos_threshold, click_threshold,
        )
    except (ValueError, FileNotFoundError) as e:
        handle_error(e)
        raise typer.Exit(1)

    report = compute_wasp_report(result.recommendations, settings)

    if output == OutputFormat.JSON:
        print_json(report.model_dump(by_alias=True, mode="json"))
    else:
        print_output(wasp_to_rows(report), output, title="Wasted Ad Spend")

    if export:
        path = export_wasp_csv(report, config.export_dir)
        console.print(f"[green]Exported[/green] {path}")
