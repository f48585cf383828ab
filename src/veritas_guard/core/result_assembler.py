"""
Maps extracted fields onto the typed result records.

Extraction already guarantees ranges and enum membership, so these functions
perform no validation of their own.
"""

from typing import Any, Iterable, List, Optional, Union

from .field_extractor import (
    DEEPFAKE_SCHEMA,
    VIRALITY_SCHEMA,
    extract_fields,
    fact_check_schema,
)
from .grounding import collect_grounding_sources
from .localization import t
from .schemas import (
    AnalysisResult,
    DeepfakeResult,
    GroundingSource,
    Language,
    RiskLevel,
    Velocity,
    Verdict,
    ViralityPrediction,
)


def assemble_analysis_result(
    text: Optional[str],
    citations: Optional[Iterable[Any]] = None,
    language: Union[str, Language] = Language.EN,
) -> AnalysisResult:
    fields = extract_fields(text, fact_check_schema(language))
    sources: List[GroundingSource] = collect_grounding_sources(citations, language)
    return AnalysisResult(
        score=fields["score"],
        verdict=Verdict(fields["verdict"]),
        risk_level=RiskLevel(fields["risk_level"]),
        risk_impact=fields["risk_impact"],
        explanation=fields["explanation"],
        sources=sources,
    )


def assemble_deepfake_result(text: Optional[str]) -> DeepfakeResult:
    fields = extract_fields(text, DEEPFAKE_SCHEMA)
    return DeepfakeResult(
        is_deepfake=fields["is_deepfake"],
        confidence=fields["confidence"],
        indicators=fields["indicators"],
        technical_analysis=fields["technical_analysis"],
    )


def assemble_virality_prediction(text: Optional[str]) -> ViralityPrediction:
    fields = extract_fields(text, VIRALITY_SCHEMA)
    return ViralityPrediction(
        virality_score=fields["virality_score"],
        estimated_reach=fields["estimated_reach"],
        velocity=Velocity(fields["velocity"]),
        reasoning=fields["reasoning"],
    )


def failed_virality_prediction(
    language: Union[str, Language] = Language.EN
) -> ViralityPrediction:
    """The zero-valued prediction reported when the virality request fails."""
    return ViralityPrediction(
        virality_score=0,
        estimated_reach="N/A",
        velocity=Velocity.SLOW,
        reasoning=t(language, "virality_failed"),
    )
