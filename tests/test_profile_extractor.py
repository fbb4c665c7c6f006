import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.ai.errors import ModelUnavailableError  # noqa: E402
from resume_optimizer.pipeline import EmptyResumeError, ProfileExtractor, fallback_extract  # noqa: E402
from tests.support import JANE_RESUME, MODEL_PROFILE, OfflineModelClient, ScriptedModelClient  # noqa: E402


class FallbackExtractionTests(unittest.TestCase):
    def test_jane_doe_scenario(self):
        profile = fallback_extract(JANE_RESUME)

        self.assertEqual(profile.personal_info.name, "Jane Doe")
        self.assertEqual(profile.personal_info.email, "jane@x.com")
        self.assertTrue(any("Product Designer" in entry.title for entry in profile.experience))
        self.assertTrue(any("Figma expert" in skill for skill in profile.skills))

    def test_experience_entry_uses_following_lines(self):
        profile = fallback_extract(JANE_RESUME)
        entry = profile.experience[0]

        self.assertEqual(entry.title, "Product Designer")
        self.assertEqual(entry.company, "Acme Corp")
        self.assertEqual(entry.description, "Acme Corp Figma expert")
        self.assertEqual(entry.duration, "")
        self.assertEqual(entry.achievements, [])

    def test_last_line_match_has_empty_company(self):
        profile = fallback_extract("Sam Lee\nUX Designer")

        self.assertEqual(profile.experience[0].company, "")
        self.assertEqual(profile.experience[0].description, "")

    def test_default_skills_when_no_keyword_line(self):
        profile = fallback_extract("Sam Lee\nsam@example.com\nWriter at Daily News")

        self.assertEqual(
            profile.skills,
            ["Figma", "Design Systems", "User Research", "Prototyping", "Adobe Creative Suite"],
        )

    def test_experience_capped_at_first_five(self):
        lines = ["Pat Kim"] + [f"Designer role {index}" for index in range(1, 9)]
        profile = fallback_extract("\n".join(lines))

        self.assertEqual(len(profile.experience), 5)
        self.assertEqual(profile.experience[0].title, "Designer role 1")
        self.assertEqual(profile.experience[-1].title, "Designer role 5")

    def test_contact_patterns(self):
        text = (
            "  Morgan Blake  \n"
            "\n"
            "morgan.blake@studio.io | +1 (415) 555-0199\n"
            "LinkedIn.com/in/morgan-blake\n"
        )
        profile = fallback_extract(text)

        self.assertEqual(profile.personal_info.name, "Morgan Blake")
        self.assertEqual(profile.personal_info.email, "morgan.blake@studio.io")
        self.assertEqual(profile.personal_info.phone, "+1 (415) 555-0199")
        self.assertEqual(profile.personal_info.linkedin, "LinkedIn.com/in/morgan-blake")
        self.assertEqual(profile.education, [])
        self.assertEqual(profile.projects, [])

    def test_missing_contacts_are_none(self):
        profile = fallback_extract("Morgan Blake\nSketch")

        self.assertIsNone(profile.personal_info.email)
        self.assertIsNone(profile.personal_info.phone)
        self.assertIsNone(profile.personal_info.linkedin)


class ProfileExtractorTests(unittest.TestCase):
    def test_model_profile_is_used_when_valid(self):
        client = ScriptedModelClient(MODEL_PROFILE)
        result = ProfileExtractor(client).extract("Alex Rivera\nSenior Product Designer")

        self.assertEqual(result.provenance, "model")
        self.assertEqual(result.value.personal_info.name, "Alex Rivera")
        self.assertEqual(result.value.education[0].institution, "SCAD")
        self.assertIn("Parse this product designer resume", client.calls[0][1].content)

    def test_fenced_json_is_accepted(self):
        import json

        client = ScriptedModelClient("```json\n" + json.dumps(MODEL_PROFILE) + "\n```")
        result = ProfileExtractor(client).extract("Alex Rivera")

        self.assertEqual(result.provenance, "model")

    def test_unavailable_model_falls_back(self):
        client = ScriptedModelClient(ModelUnavailableError("boom", code="timeout"))
        result = ProfileExtractor(client).extract(JANE_RESUME)

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.failure, "timeout")
        self.assertEqual(result.value.personal_info.name, "Jane Doe")

    def test_unexpected_exception_falls_back(self):
        client = ScriptedModelClient(ConnectionError("reset"))
        result = ProfileExtractor(client).extract(JANE_RESUME)

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.failure, "unexpected_error")

    def test_extra_top_level_key_falls_back(self):
        payload = {**MODEL_PROFILE, "summary": "Designer"}
        result = ProfileExtractor(ScriptedModelClient(payload)).extract(JANE_RESUME)

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.failure, "schema_mismatch")

    def test_missing_top_level_key_falls_back(self):
        payload = {key: value for key, value in MODEL_PROFILE.items() if key != "projects"}
        result = ProfileExtractor(ScriptedModelClient(payload)).extract(JANE_RESUME)

        self.assertEqual(result.provenance, "fallback")

    def test_non_string_name_falls_back(self):
        payload = {**MODEL_PROFILE, "personalInfo": {**MODEL_PROFILE["personalInfo"], "name": 42}}
        result = ProfileExtractor(ScriptedModelClient(payload)).extract(JANE_RESUME)

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.value.personal_info.name, "Jane Doe")

    def test_extra_leaf_key_is_ignored(self):
        experience = [{**MODEL_PROFILE["experience"][0], "team_size": 6}]
        payload = {**MODEL_PROFILE, "experience": experience}
        result = ProfileExtractor(ScriptedModelClient(payload)).extract("Alex Rivera")

        self.assertEqual(result.provenance, "model")

    def test_profile_without_skills_falls_back(self):
        payload = {**MODEL_PROFILE, "skills": []}
        result = ProfileExtractor(ScriptedModelClient(payload)).extract(JANE_RESUME)

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.failure, "incomplete_profile")

    def test_invalid_json_falls_back(self):
        result = ProfileExtractor(ScriptedModelClient("Sure! Here is the profile:")).extract(JANE_RESUME)

        self.assertEqual(result.provenance, "fallback")
        self.assertEqual(result.failure, "invalid_json")

    def test_empty_text_is_rejected_before_model_call(self):
        client = ScriptedModelClient(MODEL_PROFILE)
        extractor = ProfileExtractor(client)

        with self.assertRaises(EmptyResumeError):
            extractor.extract("   \n\t")
        self.assertEqual(client.calls, [])

    def test_non_empty_text_always_yields_name_and_skills(self):
        extractor = ProfileExtractor(OfflineModelClient())
        for text in ("x", "Line one\nLine two", "  Designer  ", JANE_RESUME):
            with self.subTest(text=text):
                profile = extractor.extract(text).value
                self.assertTrue(profile.personal_info.name)
                self.assertGreaterEqual(len(profile.skills), 1)


if __name__ == "__main__":
    unittest.main()
