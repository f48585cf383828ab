"""
Analysis flows over the Gemini endpoint: fact-check, deepfake scan, virality.

Each flow builds a request, awaits the injected GeminiClient and assembles a
typed record from the reply. Transport failures are reported as an opaque
AnalysisError for fact-check and deepfake scans. Virality failures are absorbed
into a zero-valued prediction so they never block a fact-check result.
"""

import asyncio
import logging
from typing import Optional, Union

from .config_loader import CONFIG
from .gemini_client import GeminiClient, GeminiClientError
from .geolocation import locate_user
from .localization import resolve_language
from .prompt_builder import (
    build_deepfake_request,
    build_fact_check_request,
    build_virality_request,
)
from .result_assembler import (
    assemble_analysis_result,
    assemble_deepfake_result,
    assemble_virality_prediction,
    failed_virality_prediction,
)
from .schemas import (
    AnalysisResult,
    DeepfakeResult,
    GeoLocation,
    Language,
    TruthCheckReport,
    ViralityPrediction,
)

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """An analysis could not be completed because the endpoint call failed."""

    pass


async def verify_text_with_search(
    client: GeminiClient,
    text: str,
    language: Union[str, Language] = Language.EN,
    location: Optional[GeoLocation] = None,
) -> AnalysisResult:
    """
    Verifies a claim using Gemini with Google Search and Maps grounding.

    Args:
        client (GeminiClient): The endpoint client.
        text (str): The claim or news text.
        language (Union[str, Language]): Language of the returned content.
        location (Optional[GeoLocation]): Retrieval context for Maps grounding.

    Returns:
        AnalysisResult: The parsed verdict with its grounding sources.

    Raises:
        AnalysisError: If the endpoint call fails.
    """
    lang = resolve_language(language)
    request = build_fact_check_request(text, lang, location)
    try:
        response = await client.generate(request)
    except GeminiClientError as e:
        logger.error(f"Verification error: {e}")
        raise AnalysisError("Failed to verify text.") from e
    return assemble_analysis_result(response.text, response.citations, lang)


async def detect_deepfake(
    client: GeminiClient,
    image: bytes,
    mime_type: str,
    language: Union[str, Language] = Language.EN,
) -> DeepfakeResult:
    """
    Asks a reasoning model to look for manipulation artifacts in an image.

    Raises:
        AnalysisError: If the endpoint call fails.
    """
    request = build_deepfake_request(image, mime_type, resolve_language(language))
    try:
        response = await client.generate(request)
    except GeminiClientError as e:
        logger.error(f"Deepfake detection error: {e}")
        raise AnalysisError("Deepfake detection failed") from e
    return assemble_deepfake_result(response.text)


async def predict_virality(
    client: GeminiClient,
    text: str,
    language: Union[str, Language] = Language.EN,
) -> ViralityPrediction:
    """Predicts spread potential. Never raises; failures yield a zero-valued result."""
    lang = resolve_language(language)
    request = build_virality_request(text, lang)
    try:
        response = await client.generate(request)
    except GeminiClientError as e:
        logger.error(f"Virality prediction error: {e}")
        return failed_virality_prediction(lang)
    return assemble_virality_prediction(response.text)


async def run_truth_check(
    client: GeminiClient,
    text: str,
    language: Union[str, Language] = Language.EN,
    location: Optional[GeoLocation] = None,
    locate: bool = True,
) -> TruthCheckReport:
    """
    Runs verification and virality prediction for the same text concurrently.

    If no location is given and locate is set, a time-bounded lookup runs
    first; it never fails the flow. The join is all-or-nothing: a verification
    failure raises and no partial report is returned.

    Raises:
        AnalysisError: If verification fails.
    """
    lang = resolve_language(language)
    if location is None and locate:
        location = await locate_user(CONFIG.geolocation.timeout)

    logger.info("Starting truth check (language=%s, located=%s)", lang.value, bool(location))
    analysis, virality = await asyncio.gather(
        verify_text_with_search(client, text, lang, location),
        predict_virality(client, text, lang),
    )
    return TruthCheckReport(analysis=analysis, virality=virality)
