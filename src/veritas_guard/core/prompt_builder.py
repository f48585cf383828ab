"""
Builds the outbound requests for each request kind.

Every prompt embeds the field schema the reply must follow (see field_extractor)
and a language directive: content in the target language, labels always in
English so the reply stays parseable. Building a request is pure and never
touches the network.
"""

from typing import Optional, Union

from .config_loader import CONFIG
from .field_extractor import (
    DEEPFAKE_SCHEMA,
    VIRALITY_SCHEMA,
    FieldSchema,
    fact_check_schema,
    labels,
)
from .localization import resolve_language, t
from .schemas import (
    AppConfig,
    ChatConfig,
    DeepfakeConfig,
    FactCheckConfig,
    GenerationRequest,
    GeoLocation,
    ImagePart,
    Language,
    RequestKind,
    TextPart,
    ViralityConfig,
)


def render_format(schema: FieldSchema) -> str:
    """Renders the 'LABEL: [hint]' block the model is asked to reproduce."""
    return "\n".join(f"{spec.label}: {spec.hint}".rstrip() for spec in schema)


def language_directive(language: Language, schema: FieldSchema) -> str:
    keys = ", ".join(labels(schema))
    if language == Language.EN:
        return f"(Return the content in English, keeping keys {keys})"
    return (
        f"(Return the content in {t(language, 'language_name')}, "
        f"but keep keys {keys} in English)"
    )


def build_fact_check_request(
    text: str,
    language: Union[str, Language] = Language.EN,
    location: Optional[GeoLocation] = None,
    settings: Optional[AppConfig] = None,
) -> GenerationRequest:
    """
    Builds a fact-check request grounded on Google Search and Google Maps.

    The user's location, when known, is attached as retrieval context for Maps
    grounding. It is not part of the prompt text.
    """
    settings = settings or CONFIG
    lang = resolve_language(language)
    schema = fact_check_schema(lang)
    prompt = (
        "Analyze the following claim or news text for truthfulness.\n"
        "Use Google Search and Google Maps to verify facts and locations.\n\n"
        f'Text to analyze: "{text}"\n\n'
        f"Return a structured response in {t(lang, 'language_name')} "
        f"{language_directive(lang, schema)}:\n"
        f"{render_format(schema)}\n"
    )
    return GenerationRequest(
        kind=RequestKind.FACT_CHECK,
        language=lang,
        parts=[TextPart(text=prompt)],
        config=FactCheckConfig(
            model=settings.models.fact_check,
            temperature=settings.generation.fact_check_temperature,
            location=location,
        ),
    )


def build_deepfake_request(
    image: bytes,
    mime_type: str,
    language: Union[str, Language] = Language.EN,
    settings: Optional[AppConfig] = None,
) -> GenerationRequest:
    settings = settings or CONFIG
    lang = resolve_language(language)
    if lang == Language.EN:
        instruction = "Provide the result in English."
    else:
        instruction = (
            f"Provide the result in {t(lang, 'language_name')} "
            "(values only, keep keys in English)."
        )
    prompt = (
        "Analyze this image for signs of being a Deepfake or AI-generated manipulation.\n"
        "Look for: inconsistent lighting, warped backgrounds, strange hands/fingers, "
        "skin texture issues, asymmetrical eyes.\n\n"
        f"{instruction}\n"
        "Format:\n"
        f"{render_format(DEEPFAKE_SCHEMA)}\n"
    )
    return GenerationRequest(
        kind=RequestKind.DEEPFAKE,
        language=lang,
        parts=[ImagePart(data=image, mime_type=mime_type), TextPart(text=prompt)],
        config=DeepfakeConfig(
            model=settings.models.deepfake,
            thinking_budget=settings.generation.deepfake_thinking_budget,
        ),
    )


def build_virality_request(
    text: str,
    language: Union[str, Language] = Language.EN,
    settings: Optional[AppConfig] = None,
) -> GenerationRequest:
    settings = settings or CONFIG
    lang = resolve_language(language)
    prompt = (
        "Predict the viral potential of this headline/text based on emotional "
        f'triggers and sensationalism: "{text}".\n'
        f"Response in {t(lang, 'language_name')} (Keys in English):\n"
        f"{render_format(VIRALITY_SCHEMA)}\n"
    )
    return GenerationRequest(
        kind=RequestKind.VIRALITY,
        language=lang,
        parts=[TextPart(text=prompt)],
        config=ViralityConfig(model=settings.models.virality),
    )


def build_chat_config(
    language: Union[str, Language] = Language.EN,
    settings: Optional[AppConfig] = None,
) -> ChatConfig:
    """The assistant persona for a chat session in the given language."""
    settings = settings or CONFIG
    return ChatConfig(
        model=settings.models.chat,
        system_instruction=t(language, "chat_system_instruction"),
    )


def build_request(
    kind: Union[str, RequestKind],
    payload: Union[str, bytes],
    language: Union[str, Language] = Language.EN,
    mime_type: Optional[str] = None,
    location: Optional[GeoLocation] = None,
    settings: Optional[AppConfig] = None,
) -> GenerationRequest:
    """
    Dispatches to the builder for kind.

    Args:
        kind: The request kind. A chat request carries a single turn with no history.
        payload: Claim or message text, or image bytes for a deepfake scan.
        language: Target language of the reply content.
        mime_type: Required for image payloads.
        location: Optional retrieval context for fact-check requests.
        settings: Overrides the loaded application configuration.
    """
    kind = RequestKind(kind)
    if kind == RequestKind.FACT_CHECK:
        return build_fact_check_request(str(payload), language, location, settings)
    if kind == RequestKind.VIRALITY:
        return build_virality_request(str(payload), language, settings)
    if kind == RequestKind.DEEPFAKE:
        if not isinstance(payload, bytes) or not mime_type:
            raise ValueError("Deepfake requests need image bytes and a mime type.")
        return build_deepfake_request(payload, mime_type, language, settings)
    lang = resolve_language(language)
    return GenerationRequest(
        kind=RequestKind.CHAT,
        language=lang,
        parts=[TextPart(text=str(payload))],
        config=build_chat_config(lang, settings),
    )
