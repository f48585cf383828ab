import unittest

from pydantic import ValidationError

from veritas_guard.core.result_assembler import (
    assemble_analysis_result,
    assemble_deepfake_result,
    assemble_virality_prediction,
    failed_virality_prediction,
)
from veritas_guard.core.schemas import (
    AnalysisResult,
    GroundingSource,
    Language,
    RiskLevel,
    Velocity,
    Verdict,
)


class TestResultAssembler(unittest.TestCase):
    """Test cases for mapping extracted fields onto result records."""

    def test_fake_claim_reply(self):
        """Tests the canonical fully-labeled fact-check reply."""
        text = (
            "VERDICT: FAKE\nSCORE: 12\nRISK_LEVEL: HIGH\n"
            "IMPACT: causes panic\nEXPLANATION: no credible source found"
        )
        result = assemble_analysis_result(text)
        self.assertIsInstance(result, AnalysisResult)
        self.assertEqual(result.verdict, Verdict.FAKE)
        self.assertEqual(result.score, 12)
        self.assertEqual(result.risk_level, RiskLevel.HIGH)
        self.assertEqual(result.risk_impact, "causes panic")
        self.assertEqual(result.explanation, "no credible source found")
        self.assertEqual(result.sources, [])

    def test_unlabeled_reply_falls_back_to_raw_text(self):
        """Tests that an unlabeled reply yields every default and the raw text."""
        text = "The model ignored the format.\nIt wrote prose instead."
        result = assemble_analysis_result(text, language=Language.RU)
        self.assertEqual(result.verdict, Verdict.PARTIAL)
        self.assertEqual(result.score, 50)
        self.assertEqual(result.risk_level, RiskLevel.MEDIUM)
        self.assertEqual(result.risk_impact, "Не удалось оценить влияние.")
        self.assertEqual(result.explanation, text)

    def test_sources_are_attached_in_order(self):
        citations = [
            {"web": {"uri": "https://a.example", "title": "A"}},
            {"maps": {"uri": "https://maps.example/1", "title": ""}},
        ]
        result = assemble_analysis_result("VERDICT: TRUE", citations)
        self.assertEqual(
            result.sources,
            [
                GroundingSource(uri="https://a.example", title="A"),
                GroundingSource(uri="https://maps.example/1", title="Google Maps Location"),
            ],
        )

    def test_deepfake_result(self):
        text = (
            "IS_DEEPFAKE: YES\nCONFIDENCE: 87\n"
            "INDICATORS: blurry eyes, odd lighting, \n"
            "ANALYSIS: Skin texture is too smooth.\nShadows disagree."
        )
        result = assemble_deepfake_result(text)
        self.assertTrue(result.is_deepfake)
        self.assertEqual(result.confidence, 87)
        self.assertEqual(result.indicators, ["blurry eyes", "odd lighting"])
        self.assertEqual(
            result.technical_analysis, "Skin texture is too smooth.\nShadows disagree."
        )

    def test_deepfake_defaults(self):
        result = assemble_deepfake_result("Looks authentic to me.")
        self.assertFalse(result.is_deepfake)
        self.assertEqual(result.confidence, 0)
        self.assertEqual(result.indicators, [])
        self.assertEqual(result.technical_analysis, "Looks authentic to me.")

    def test_virality_prediction(self):
        text = "SCORE: 240\nREACH: 100k+ people\nVELOCITY: explosive\nREASONING: Fear appeal."
        result = assemble_virality_prediction(text)
        self.assertEqual(result.virality_score, 100)
        self.assertEqual(result.estimated_reach, "100k+ people")
        self.assertEqual(result.velocity, Velocity.EXPLOSIVE)
        self.assertEqual(result.reasoning, "Fear appeal.")

    def test_failed_virality_prediction(self):
        result = failed_virality_prediction(Language.EN)
        self.assertEqual(result.virality_score, 0)
        self.assertEqual(result.estimated_reach, "N/A")
        self.assertEqual(result.velocity, Velocity.SLOW)
        self.assertEqual(result.reasoning, "Analysis failed")
        self.assertEqual(
            failed_virality_prediction(Language.RU).reasoning, "Анализ не удался"
        )

    def test_results_are_immutable(self):
        result = assemble_analysis_result("VERDICT: TRUE")
        with self.assertRaises(ValidationError):
            result.score = 99  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
