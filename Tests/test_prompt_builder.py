import unittest

from veritas_guard.core.prompt_builder import (
    build_chat_config,
    build_deepfake_request,
    build_fact_check_request,
    build_request,
    build_virality_request,
    render_format,
)
from veritas_guard.core.field_extractor import VIRALITY_SCHEMA
from veritas_guard.core.schemas import (
    AppConfig,
    ChatConfig,
    DeepfakeConfig,
    FactCheckConfig,
    GenerationRequest,
    GeoLocation,
    ImagePart,
    Language,
    ModelsConfig,
    RequestKind,
    TextPart,
    ViralityConfig,
)

SETTINGS = AppConfig()


class TestPromptBuilder(unittest.TestCase):
    """Test cases for request construction per request kind."""

    def test_fact_check_prompt_embeds_claim_and_schema(self):
        request = build_fact_check_request("The moon is cheese", "en", settings=SETTINGS)
        self.assertEqual(request.kind, RequestKind.FACT_CHECK)
        self.assertIn('"The moon is cheese"', request.prompt)
        for label in ("VERDICT:", "SCORE:", "RISK_LEVEL:", "IMPACT:", "EXPLANATION:"):
            self.assertIn(label, request.prompt)
        self.assertIn("Return the content in English", request.prompt)
        self.assertIsInstance(request.config, FactCheckConfig)
        self.assertEqual(request.config.model, "gemini-2.5-flash")
        self.assertEqual(request.config.temperature, 0.3)
        self.assertTrue(request.config.search_grounding)
        self.assertTrue(request.config.maps_grounding)
        self.assertIsNone(request.config.location)

    def test_fact_check_language_directive_keeps_english_keys(self):
        request = build_fact_check_request("Claim", Language.RU, settings=SETTINGS)
        self.assertEqual(request.language, Language.RU)
        self.assertIn("Return a structured response in Russian", request.prompt)
        self.assertIn(
            "keep keys VERDICT, SCORE, RISK_LEVEL, IMPACT, EXPLANATION in English",
            request.prompt,
        )

    def test_location_is_passed_through_as_context(self):
        location = GeoLocation(latitude=55.7558, longitude=37.6173)
        request = build_fact_check_request("Claim", "en", location, settings=SETTINGS)
        self.assertEqual(request.config.location, location)
        self.assertNotIn("55.7558", request.prompt)

    def test_deepfake_request_carries_image(self):
        request = build_deepfake_request(b"\x89PNG", "image/png", "ru", settings=SETTINGS)
        self.assertEqual(request.kind, RequestKind.DEEPFAKE)
        image = request.parts[0]
        self.assertIsInstance(image, ImagePart)
        self.assertEqual(image.data, b"\x89PNG")
        self.assertEqual(image.mime_type, "image/png")
        self.assertIsInstance(request.parts[1], TextPart)
        for label in ("IS_DEEPFAKE:", "CONFIDENCE:", "INDICATORS:", "ANALYSIS:"):
            self.assertIn(label, request.prompt)
        self.assertIn("keep keys in English", request.prompt)
        self.assertIsInstance(request.config, DeepfakeConfig)
        self.assertEqual(request.config.thinking_budget, 4096)

    def test_virality_request_uses_configured_model(self):
        settings = AppConfig(models=ModelsConfig(virality="custom-lite"))
        request = build_virality_request("Shocking headline", "en", settings=settings)
        self.assertIsInstance(request.config, ViralityConfig)
        self.assertEqual(request.config.model, "custom-lite")
        self.assertIn(render_format(VIRALITY_SCHEMA), request.prompt)
        self.assertIn("VELOCITY: [Slow, Moderate, Viral, Explosive]", request.prompt)

    def test_chat_config_is_localized(self):
        english = build_chat_config("en", settings=SETTINGS)
        russian = build_chat_config("ru", settings=SETTINGS)
        self.assertIsInstance(english, ChatConfig)
        self.assertIn("Veritas Assistant", english.system_instruction)
        self.assertIn("Answer in English", english.system_instruction)
        self.assertIn("русском", russian.system_instruction)

    def test_build_request_dispatch(self):
        self.assertEqual(
            build_request("virality", "text", settings=SETTINGS).kind, RequestKind.VIRALITY
        )
        self.assertEqual(
            build_request(
                RequestKind.DEEPFAKE, b"img", mime_type="image/jpeg", settings=SETTINGS
            ).kind,
            RequestKind.DEEPFAKE,
        )
        with self.assertRaises(ValueError):
            build_request(RequestKind.DEEPFAKE, b"img", settings=SETTINGS)
        chat = build_request(RequestKind.CHAT, "hello", language="ru", settings=SETTINGS)
        self.assertEqual(chat.kind, RequestKind.CHAT)
        self.assertEqual(chat.prompt, "hello")
        self.assertEqual(chat.config, build_chat_config("ru", settings=SETTINGS))

    def test_unknown_language_falls_back_to_english(self):
        request = build_virality_request("Headline", "de", settings=SETTINGS)
        self.assertEqual(request.language, Language.EN)

    def test_request_config_is_tagged_by_kind(self):
        request = GenerationRequest.model_validate(
            {
                "kind": "virality",
                "language": "en",
                "parts": [{"type": "text", "text": "hi"}],
                "config": {"kind": "virality", "model": "m"},
            }
        )
        self.assertIsInstance(request.config, ViralityConfig)
        self.assertIsInstance(request.parts[0], TextPart)


if __name__ == "__main__":
    unittest.main()
