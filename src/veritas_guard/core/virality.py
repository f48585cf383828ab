"""
Module for virality forecasting of headlines and claims.
"""

import asyncio
from typing import Optional

import typer

from .config_loader import CONFIG
from .analysis_service import predict_virality
from .gemini_client import create_gemini_client
from .localization import resolve_language
from .utils import console, save_or_print_results

virality_app = typer.Typer()


@virality_app.command("predict")
def predict_virality_cli(
    text: str = typer.Argument(..., help="The headline or text to assess."),
    lang: str = typer.Option(
        CONFIG.default_language.value, "--lang", "-l", help="Result language (en or ru)."
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Save results to a JSON file."
    ),
):
    """
    Predicts the viral potential of a headline.
    """
    client = create_gemini_client()
    with console.status("[bold cyan]Forecasting virality...[/bold cyan]"):
        result = asyncio.run(predict_virality(client, text, resolve_language(lang)))
    save_or_print_results(result.model_dump(mode="json"), output_file)
