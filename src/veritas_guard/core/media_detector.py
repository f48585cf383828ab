"""
Module for deepfake screening of images.
"""

import asyncio
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Tuple

import typer

from .config_loader import CONFIG
from .analysis_service import AnalysisError, detect_deepfake
from .gemini_client import create_gemini_client
from .localization import resolve_language, t
from .utils import console, save_or_print_results

logger = logging.getLogger(__name__)

media_detector_app = typer.Typer()


def load_image(path: str) -> Tuple[bytes, str]:
    """
    Reads an image file and determines its mime type from the file name.

    Raises:
        ValueError: If the file is not a recognized image type.
        OSError: If the file cannot be read.
    """
    mime_type, _ = mimetypes.guess_type(path)
    if not mime_type or not mime_type.startswith("image/"):
        raise ValueError(f"'{path}' is not a supported image file.")
    return Path(path).read_bytes(), mime_type


@media_detector_app.command("scan")
def scan_image(
    image_path: str = typer.Argument(..., help="Path to the image to analyze."),
    lang: str = typer.Option(
        CONFIG.default_language.value, "--lang", "-l", help="Result language (en or ru)."
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Save results to a JSON file."
    ),
):
    """
    Scans an image for signs of deepfake or AI-generated manipulation.
    """
    language = resolve_language(lang)
    try:
        image, mime_type = load_image(image_path)
    except (ValueError, OSError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(code=1)

    client = create_gemini_client()
    try:
        with console.status("[bold cyan]Scanning image for manipulation...[/bold cyan]"):
            result = asyncio.run(detect_deepfake(client, image, mime_type, language))
    except AnalysisError as e:
        logger.error(f"Deepfake scan failed for {image_path}: {e}")
        console.print(f"[bold red]{t(language, 'media_error')}[/bold red]")
        raise typer.Exit(code=1)

    save_or_print_results(result.model_dump(mode="json"), output_file)
