import logging
from typing import Any, List, Optional, Sequence

from google import genai
from google.genai import types

from .config_loader import API_KEYS
from .schemas import (
    ChatConfig,
    ChatMessage,
    DeepfakeConfig,
    FactCheckConfig,
    GenerationRequest,
    GenerationResponse,
    ImagePart,
    TextPart,
    ViralityConfig,
)

logger = logging.getLogger(__name__)


class GeminiClientError(Exception):
    """Raised when the Gemini endpoint cannot be reached or rejects a request."""

    pass


def build_generation_config(config: Any) -> types.GenerateContentConfig:
    """Translates a per-kind request config into the SDK's generation config."""
    if isinstance(config, FactCheckConfig):
        tools = []
        if config.search_grounding:
            tools.append(types.Tool(google_search=types.GoogleSearch()))
        if config.maps_grounding:
            tools.append(types.Tool(google_maps=types.GoogleMaps()))
        tool_config = None
        if config.location:
            tool_config = types.ToolConfig(
                retrieval_config=types.RetrievalConfig(
                    lat_lng=types.LatLng(
                        latitude=config.location.latitude,
                        longitude=config.location.longitude,
                    )
                )
            )
        return types.GenerateContentConfig(
            temperature=config.temperature,
            tools=tools or None,
            tool_config=tool_config,
        )
    if isinstance(config, DeepfakeConfig):
        return types.GenerateContentConfig(
            thinking_config=types.ThinkingConfig(thinking_budget=config.thinking_budget)
        )
    if isinstance(config, ChatConfig):
        return types.GenerateContentConfig(
            system_instruction=config.system_instruction or None
        )
    if isinstance(config, ViralityConfig):
        return types.GenerateContentConfig()
    raise TypeError(f"Unsupported request config: {type(config).__name__}")


def _to_sdk_parts(request: GenerationRequest) -> List[types.Part]:
    parts = []
    for part in request.parts:
        if isinstance(part, ImagePart):
            parts.append(types.Part.from_bytes(data=part.data, mime_type=part.mime_type))
        elif isinstance(part, TextPart):
            parts.append(types.Part.from_text(text=part.text))
    return parts


def _grounding_chunks(response: Any) -> List[Any]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    return list(getattr(metadata, "grounding_chunks", None) or [])


class GeminiClient:
    """A client for interacting with the Google Gemini API."""

    def __init__(self, api_key: Optional[str] = None):
        """Initializes the Gemini client with an explicit API key."""
        self.api_key = api_key
        if not self.api_key:
            logger.error("Gemini API key not found in configuration.")
            self.client = None
            return
        try:
            self.client = genai.Client(api_key=self.api_key)
        except Exception as e:
            logger.error(f"Failed to configure Gemini client: {e}")
            self.client = None

    def _require_client(self) -> Any:
        if not self.client:
            raise GeminiClientError("Gemini client is not configured.")
        return self.client

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """
        Sends a single generation request.

        Args:
            request (GenerationRequest): The request built by the prompt builder.

        Returns:
            GenerationResponse: The raw reply text and any grounding chunks.

        Raises:
            GeminiClientError: If the client is unconfigured or the call fails.
        """
        client = self._require_client()
        try:
            response = await client.aio.models.generate_content(
                model=request.config.model,
                contents=_to_sdk_parts(request),
                config=build_generation_config(request.config),
            )
        except Exception as e:
            logger.error(f"Gemini {request.kind.value} request failed: {e}")
            raise GeminiClientError(str(e)) from e
        return GenerationResponse(
            text=response.text or "", citations=_grounding_chunks(response)
        )

    async def send_chat(
        self, config: ChatConfig, history: Sequence[ChatMessage], message: str
    ) -> str:
        """
        Sends one chat turn together with the full prior history.

        Args:
            config (ChatConfig): Model and system instruction for the session.
            history (Sequence[ChatMessage]): Earlier successful turns, oldest first.
            message (str): The new user message.

        Returns:
            str: The model's reply text.

        Raises:
            GeminiClientError: If the client is unconfigured or the call fails.
        """
        client = self._require_client()
        contents = [
            types.Content(role=m.role.value, parts=[types.Part.from_text(text=m.text)])
            for m in history
        ]
        contents.append(
            types.Content(role="user", parts=[types.Part.from_text(text=message)])
        )
        try:
            response = await client.aio.models.generate_content(
                model=config.model,
                contents=contents,
                config=build_generation_config(config),
            )
        except Exception as e:
            logger.error(f"Gemini chat request failed: {e}")
            raise GeminiClientError(str(e)) from e
        return (response.text or "").strip()


def create_gemini_client() -> GeminiClient:
    """Builds a client from the configured credentials."""
    return GeminiClient(API_KEYS.google_api_key)
