"""
Localized strings for the two supported languages.

Field labels in prompts are never localized; only the human-readable text
returned to the user is.
"""

from typing import Dict, Union

from .schemas import Language

STRINGS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "language_name": "English",
        "web_source": "Web Source",
        "maps_source": "Google Maps Location",
        "impact_unavailable": "Could not assess impact.",
        "virality_failed": "Analysis failed",
        "analysis_error": "Analysis error. Please try again.",
        "media_error": "Image analysis failed. Please try again.",
        "chat_welcome": (
            "Hello! I am Veritas Assistant. Ask me how to spot fake news, "
            "check a claim, or recognize manipulation techniques."
        ),
        "chat_error": "Sorry, I could not process your request. Please try again.",
        "chat_system_instruction": (
            "You are 'Veritas Assistant', an expert in media literacy, fact-checking, "
            "and digital safety. Your goal is to help users identify fake news, explain "
            "logical fallacies, and teach critical thinking. Be concise, scientific, yet "
            "accessible. Answer in English."
        ),
    },
    Language.RU: {
        "language_name": "Russian",
        "web_source": "Веб-источник",
        "maps_source": "Локация Google Maps",
        "impact_unavailable": "Не удалось оценить влияние.",
        "virality_failed": "Анализ не удался",
        "analysis_error": "Ошибка анализа. Пожалуйста, попробуйте снова.",
        "media_error": "Не удалось проанализировать изображение. Попробуйте снова.",
        "chat_welcome": (
            "Здравствуйте! Я Veritas Assistant. Спросите меня, как распознать "
            "фейковые новости, проверить утверждение или заметить манипуляцию."
        ),
        "chat_error": "Извините, не удалось обработать запрос. Попробуйте снова.",
        "chat_system_instruction": (
            "Вы — 'Veritas Assistant', эксперт по медиаграмотности, проверке фактов и "
            "цифровой безопасности. Ваша цель — помогать пользователям выявлять фейковые "
            "новости, объяснять логические ошибки и учить критическому мышлению. Будьте "
            "кратки, научны, но доступны. Отвечайте на русском языке."
        ),
    },
}


def resolve_language(value: Union[str, Language, None]) -> Language:
    """Maps a language code to a Language, falling back to English."""
    if isinstance(value, Language):
        return value
    try:
        return Language((value or "").strip().lower())
    except ValueError:
        return Language.EN


def t(language: Union[str, Language], key: str) -> str:
    """Returns the localized string for key."""
    return STRINGS[resolve_language(language)][key]
