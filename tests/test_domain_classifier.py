import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.pipeline import DomainClassifier, fallback_classify  # noqa: E402
from resume_optimizer.schemas import CandidateProfile, ExperienceEntry, PersonalInfo  # noqa: E402
from tests.support import MODEL_CLASSIFICATION, OfflineModelClient, ScriptedModelClient  # noqa: E402


def _profile(*, skills=None, descriptions=(), experience_count=None):
    descriptions = list(descriptions)
    if experience_count is not None:
        descriptions = descriptions + [""] * (experience_count - len(descriptions))
    return CandidateProfile(
        personal_info=PersonalInfo(name="Casey"),
        experience=[
            ExperienceEntry(title=f"Designer {index}", company="Co", duration="", description=text)
            for index, text in enumerate(descriptions)
        ],
        education=[],
        skills=list(skills or []),
        projects=[],
    )


class FallbackClassificationTests(unittest.TestCase):
    def test_empty_profile_defaults_to_b2b_saas(self):
        classification = fallback_classify(_profile())

        self.assertEqual(classification.domains[0].name, "B2B SaaS")
        self.assertEqual(classification.domains[0].confidence, 75)
        self.assertEqual(classification.ats_score, 60)
        self.assertEqual(classification.seniority_level, "Junior")
        self.assertEqual(classification.experience_years, 1)

    def test_six_sorted_domains_within_floor(self):
        profile = _profile(
            skills=["Figma", "Retail analytics"],
            descriptions=["Designed a patient portal for a medical group", "Built banking flows"],
        )
        classification = fallback_classify(profile)
        confidences = [match.confidence for match in classification.domains]

        self.assertEqual(len(classification.domains), 6)
        self.assertEqual(confidences, sorted(confidences, reverse=True))
        self.assertTrue(all(25 <= value <= 100 for value in confidences))
        self.assertIn(classification.seniority_level, {"Junior", "Mid", "Senior", "Staff"})

    def test_keyword_hits_score_thirty_once(self):
        profile = _profile(descriptions=["fintech fintech banking financial dashboards"])
        scores = {match.name: match.confidence for match in fallback_classify(profile).domains}

        self.assertEqual(scores["Fintech"], 30)
        self.assertEqual(scores["B2B SaaS"], 25)

    def test_ties_keep_bucket_order(self):
        profile = _profile(descriptions=["enterprise tools for student learning"])
        names = [match.name for match in fallback_classify(profile).domains]

        self.assertEqual(names[:2], ["B2B SaaS", "EdTech"])
        self.assertEqual(names[2:], ["E-commerce", "Fintech", "Healthcare", "Consumer Apps"])

    def test_consumer_apps_never_scores(self):
        profile = _profile(skills=["consumer apps", "mobile", "social"], descriptions=["consumer app growth"])
        scores = {match.name: match.confidence for match in fallback_classify(profile).domains}

        self.assertEqual(scores["Consumer Apps"], 25)

    def test_reasoning_is_shared(self):
        reasons = {match.reasoning for match in fallback_classify(_profile()).domains}

        self.assertEqual(reasons, {"Based on keyword analysis and experience content"})

    def test_seniority_bands(self):
        cases = {0: ("Junior", 1), 1: ("Junior", 1), 2: ("Mid", 3), 3: ("Mid", 3), 4: ("Senior", 5), 5: ("Senior", 5), 6: ("Staff", 7), 9: ("Staff", 7)}
        for count, (level, years) in cases.items():
            with self.subTest(count=count):
                classification = fallback_classify(_profile(experience_count=count))
                self.assertEqual(classification.seniority_level, level)
                self.assertEqual(classification.experience_years, years)

    def test_ats_score_is_capped_at_ninety(self):
        self.assertEqual(fallback_classify(_profile(skills=["a", "b"], experience_count=2)).ats_score, 74)
        self.assertEqual(fallback_classify(_profile(skills=["s"] * 20, experience_count=6)).ats_score, 90)

    def test_fallback_is_deterministic(self):
        profile = _profile(skills=["Figma", "SaaS"], descriptions=["Shopping cart redesign"])

        first = fallback_classify(profile).model_dump_json(by_alias=True)
        second = fallback_classify(profile).model_dump_json(by_alias=True)
        self.assertEqual(first, second)


class DomainClassifierTests(unittest.TestCase):
    def test_model_output_is_clamped_and_sorted(self):
        client = ScriptedModelClient(MODEL_CLASSIFICATION)
        result = DomainClassifier(client).classify(_profile(skills=["Figma"]))

        self.assertEqual(result.provenance, "model")
        self.assertEqual(result.value.domains[0].name, "Fintech")
        self.assertEqual(result.value.domains[0].confidence, 100)
        self.assertEqual(result.value.seniority_level, "Principal")
        self.assertEqual(result.value.ats_score, 97)
        self.assertIn('"personalInfo"', client.calls[0][1].content)

    def test_model_ats_score_is_clamped(self):
        payload = {**MODEL_CLASSIFICATION, "atsScore": 140.6}
        result = DomainClassifier(ScriptedModelClient(payload)).classify(_profile())

        self.assertEqual(result.provenance, "model")
        self.assertEqual(result.value.ats_score, 100)

    def test_non_finite_experience_years_fall_back(self):
        raw = json.dumps({**MODEL_CLASSIFICATION, "experienceYears": 0}).replace(
            '"experienceYears": 0', '"experienceYears": 1e999'
        )
        result = DomainClassifier(ScriptedModelClient(raw)).classify(_profile())

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.failure, "schema_mismatch")
        self.assertEqual(result.value.experience_years, 1)
        self.assertIsInstance(result.value.experience_years, int)

    def test_nan_confidence_falls_back(self):
        domains = [{"name": "Garbage", "confidence": float("nan"), "reasoning": "?"}]
        result = DomainClassifier(ScriptedModelClient({**MODEL_CLASSIFICATION, "domains": domains})).classify(_profile())

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.failure, "schema_mismatch")
        self.assertNotIn("Garbage", [match.name for match in result.value.domains])

    def test_whole_model_years_stay_integers(self):
        result = DomainClassifier(ScriptedModelClient(MODEL_CLASSIFICATION)).classify(_profile())
        self.assertEqual(result.value.model_dump(by_alias=True)["experienceYears"], 11)
        self.assertIsInstance(result.value.experience_years, int)

    def test_unknown_seniority_falls_back(self):
        payload = {**MODEL_CLASSIFICATION, "seniorityLevel": "Lead"}
        result = DomainClassifier(ScriptedModelClient(payload)).classify(_profile())

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.value.seniority_level, "Junior")

    def test_empty_domains_fall_back(self):
        payload = {**MODEL_CLASSIFICATION, "domains": []}
        result = DomainClassifier(ScriptedModelClient(payload)).classify(_profile())

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(len(result.value.domains), 6)

    def test_offline_client_uses_fallback(self):
        result = DomainClassifier(OfflineModelClient()).classify(_profile())

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.failure, "llm_disabled")


if __name__ == "__main__":
    unittest.main()
