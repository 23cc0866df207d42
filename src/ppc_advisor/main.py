"""PPC Advisor CLI — entry point.

Turns Amazon PPC, Search Query Performance and organic rank reports into
per-keyword bid recommendations and a wasted spend breakdown.
"""

from __future__ import annotations

import logging

import typer

from ppc_advisor.commands.analyze_cmd import app as analyze_app

app = typer.Typer(
    name="ppc-advisor",
    help="Bid recommendations and wasted spend analysis from Amazon advertising reports.",
    no_args_is_help=True,
)

app.add_typer(analyze_app, name="analyze")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """PPC Advisor — analyze keyword reports and spot wasted spend."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
