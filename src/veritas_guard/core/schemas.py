"""
Pydantic models for Veritas Guard.

This module holds the typed records returned to the display layer, the
per-request-kind configuration consumed by the Gemini client, and the
application configuration loaded from 'config.yaml'.
"""

from enum import Enum
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated


# --- Enumerations ---


class Language(str, Enum):
    """Supported target languages. English is the default."""

    EN = "en"
    RU = "ru"


class Verdict(str, Enum):
    FAKE = "FAKE"
    PARTIAL = "PARTIAL"
    TRUE = "TRUE"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Velocity(str, Enum):
    SLOW = "Slow"
    MODERATE = "Moderate"
    VIRAL = "Viral"
    EXPLOSIVE = "Explosive"


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


class RequestKind(str, Enum):
    FACT_CHECK = "fact_check"
    DEEPFAKE = "deepfake"
    VIRALITY = "virality"
    CHAT = "chat"


# --- Result Records ---


class GroundingSource(BaseModel):
    """A citation (web link or map reference) the model used for its answer."""

    model_config = ConfigDict(frozen=True)

    uri: str
    title: str


class AnalysisResult(BaseModel):
    """The structured verdict of a fact-check request."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    verdict: Verdict
    risk_level: RiskLevel
    risk_impact: str
    explanation: str
    sources: List[GroundingSource] = Field(default_factory=list)


class DeepfakeResult(BaseModel):
    """The structured outcome of a deepfake scan of a single image."""

    model_config = ConfigDict(frozen=True)

    is_deepfake: bool
    confidence: int = Field(..., ge=0, le=100)
    indicators: List[str] = Field(default_factory=list)
    technical_analysis: str


class ViralityPrediction(BaseModel):
    """The predicted spread potential of a headline or claim."""

    model_config = ConfigDict(frozen=True)

    virality_score: int = Field(..., ge=0, le=100)
    estimated_reach: str
    velocity: Velocity
    reasoning: str


class TruthCheckReport(BaseModel):
    """Verification and virality results for the same claim, produced together."""

    model_config = ConfigDict(frozen=True)

    analysis: AnalysisResult
    virality: ViralityPrediction


class ChatMessage(BaseModel):
    """A single message in a chat session."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: ChatRole
    text: str
    timestamp: int


class GeoLocation(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


# --- Request Configuration ---


class FactCheckConfig(BaseModel):
    """Options for a fact-check request grounded on Search and Maps."""

    kind: Literal["fact_check"] = "fact_check"
    model: str = "gemini-2.5-flash"
    temperature: float = 0.3
    search_grounding: bool = True
    maps_grounding: bool = True
    location: Optional[GeoLocation] = None


class DeepfakeConfig(BaseModel):
    """Options for an image deepfake scan."""

    kind: Literal["deepfake"] = "deepfake"
    model: str = "gemini-3-pro-preview"
    thinking_budget: int = 4096


class ViralityConfig(BaseModel):
    kind: Literal["virality"] = "virality"
    model: str = "gemini-flash-lite-latest"


class ChatConfig(BaseModel):
    kind: Literal["chat"] = "chat"
    model: str = "gemini-3-pro-preview"
    system_instruction: str = ""


RequestConfig = Annotated[
    Union[FactCheckConfig, DeepfakeConfig, ViralityConfig, ChatConfig],
    Field(discriminator="kind"),
]


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImagePart(BaseModel):
    type: Literal["image"] = "image"
    data: bytes
    mime_type: str


ContentPart = Annotated[Union[TextPart, ImagePart], Field(discriminator="type")]


class GenerationRequest(BaseModel):
    """
    An outbound request description built by the prompt builder.

    The client turns it into an SDK call. No network activity is implied by
    constructing one.
    """

    kind: RequestKind
    language: Language
    parts: List[ContentPart]
    config: RequestConfig

    @property
    def prompt(self) -> str:
        """The concatenated instruction text of all text parts."""
        return "\n".join(p.text for p in self.parts if isinstance(p, TextPart))


class GenerationResponse(BaseModel):
    """Raw reply text plus any citation records from the endpoint."""

    text: str = ""
    citations: List[Any] = Field(default_factory=list)


# --- Application Configuration ---


class NetworkConfig(BaseModel):
    timeout: float = 20.0


class GeolocationConfig(BaseModel):
    enabled: bool = True
    timeout: float = 5.0
    lookup_url: str = "http://ip-api.com/json"


class ModelsConfig(BaseModel):
    fact_check: str = "gemini-2.5-flash"
    deepfake: str = "gemini-3-pro-preview"
    virality: str = "gemini-flash-lite-latest"
    chat: str = "gemini-3-pro-preview"


class GenerationSettings(BaseModel):
    fact_check_temperature: float = 0.3
    deepfake_thinking_budget: int = 4096


class AppConfig(BaseModel):
    app_name: str = "Veritas Guard"
    version: str = "1.0.0"
    log_level: str = "INFO"
    default_language: Language = Language.EN
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    geolocation: GeolocationConfig = Field(default_factory=GeolocationConfig)
    models: ModelsConfig = Field(default_factory=ModelsConfig)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
