"""
Module for claim verification.

Checks a claim's truthfulness against Google Search and Maps grounding and
predicts its virality in the same run.
"""

import asyncio
import logging
from typing import Optional

import typer
from rich.table import Table

from .config_loader import CONFIG
from .analysis_service import AnalysisError, run_truth_check
from .gemini_client import create_gemini_client
from .localization import resolve_language, t
from .schemas import GeoLocation, TruthCheckReport
from .utils import console, save_or_print_results

logger = logging.getLogger(__name__)

truth_checker_app = typer.Typer()

_VERDICT_STYLES = {"FAKE": "bold red", "PARTIAL": "bold yellow", "TRUE": "bold green"}


def _print_sources(report: TruthCheckReport) -> None:
    if not report.analysis.sources:
        return
    table = Table(title="Grounding Sources")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("URI")
    for index, source in enumerate(report.analysis.sources, start=1):
        table.add_row(str(index), source.title, source.uri)
    console.print(table)


@truth_checker_app.command("run")
def run_truth_check_cli(
    text: str = typer.Argument(..., help="The claim or news text to verify."),
    lang: str = typer.Option(
        CONFIG.default_language.value, "--lang", "-l", help="Result language (en or ru)."
    ),
    lat: Optional[float] = typer.Option(
        None, "--lat", min=-90.0, max=90.0, help="Latitude for Maps grounding."
    ),
    lng: Optional[float] = typer.Option(
        None, "--lng", min=-180.0, max=180.0, help="Longitude for Maps grounding."
    ),
    locate: bool = typer.Option(
        True, "--locate/--no-locate", help="Look up an approximate location by IP."
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Save results to a JSON file."
    ),
):
    """
    Verifies a claim and predicts how fast it could spread.
    """
    language = resolve_language(lang)
    location = None
    if lat is not None and lng is not None:
        location = GeoLocation(latitude=lat, longitude=lng)

    client = create_gemini_client()
    try:
        with console.status("[bold cyan]Verifying claim...[/bold cyan]"):
            report = asyncio.run(
                run_truth_check(client, text, language, location, locate=locate)
            )
    except AnalysisError as e:
        logger.error(f"Truth check failed: {e}")
        console.print(f"[bold red]{t(language, 'analysis_error')}[/bold red]")
        raise typer.Exit(code=1)

    style = _VERDICT_STYLES.get(report.analysis.verdict.value, "bold")
    console.print(
        f"[{style}]{report.analysis.verdict.value}[/{style}] "
        f"score={report.analysis.score} risk={report.analysis.risk_level.value}"
    )
    _print_sources(report)
    save_or_print_results(report.model_dump(mode="json"), output_file)
