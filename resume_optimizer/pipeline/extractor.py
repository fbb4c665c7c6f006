from __future__ import annotations

import logging
import re

from resume_optimizer.ai.errors import ModelResponseError
from resume_optimizer.ai.types import ModelClient
from resume_optimizer.schemas import CandidateProfile, ExperienceEntry, PersonalInfo

from .heuristics import get_heuristic_value
from .prompts import extraction_messages
from .stage import StageResult, parse_model_output, run_stage

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_PATTERN = re.compile(r"[+]?[(]?[\d\s\-()]{10,}")
_LINKEDIN_PATTERN = re.compile(r"linkedin\.com/in/[\w\-]+", re.IGNORECASE)

_DEFAULT_SKILLS = ["Figma", "Design Systems", "User Research", "Prototyping", "Adobe Creative Suite"]


class EmptyResumeError(ValueError):
    pass


def _first_match(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(0).strip()
    return value or None


def _contains_any(line: str, keywords: list[str]) -> bool:
    lowered = line.lower()
    return any(keyword in lowered for keyword in keywords)


def fallback_extract(resume_text: str) -> CandidateProfile:
    lines = [line.strip() for line in resume_text.split("\n") if line.strip()]
    skill_keywords = list(get_heuristic_value("extractor.skill_keywords", []))
    experience_keywords = list(get_heuristic_value("extractor.experience_keywords", []))
    max_entries = int(get_heuristic_value("extractor.max_experience_entries", 5))
    window = int(get_heuristic_value("extractor.description_window", 3))

    skills: list[str] = []
    experience: list[ExperienceEntry] = []
    for index, line in enumerate(lines):
        if _contains_any(line, skill_keywords):
            skills.append(line)
        if _contains_any(line, experience_keywords):
            experience.append(
                ExperienceEntry(
                    title=line,
                    company=lines[index + 1] if index + 1 < len(lines) else "",
                    duration="",
                    description=" ".join(lines[index + 1 : index + 1 + window]),
                    achievements=[],
                )
            )

    if not skills:
        skills = list(get_heuristic_value("extractor.default_skills", _DEFAULT_SKILLS))

    return CandidateProfile(
        personal_info=PersonalInfo(
            name=lines[0] if lines else "",
            email=_first_match(_EMAIL_PATTERN, resume_text),
            phone=_first_match(_PHONE_PATTERN, resume_text),
            linkedin=_first_match(_LINKEDIN_PATTERN, resume_text),
        ),
        # Earliest-found entries win, not the most recent ones.
        experience=experience[:max_entries],
        education=[],
        skills=skills,
        projects=[],
    )


class ProfileExtractor:
    def __init__(self, client: ModelClient, *, max_output_tokens: int | None = None):
        self._client = client
        self._max_output_tokens = max_output_tokens

    def _from_model(self, resume_text: str) -> CandidateProfile:
        raw = self._client.complete(extraction_messages(resume_text), max_output_tokens=self._max_output_tokens)
        profile = parse_model_output(raw, CandidateProfile)
        if not (profile.personal_info.name or "").strip() or not profile.skills:
            raise ModelResponseError("Model profile has no name or no skills.", code="incomplete_profile")
        return profile

    def extract(self, resume_text: str) -> StageResult[CandidateProfile]:
        if not resume_text or not resume_text.strip():
            raise EmptyResumeError("Resume text must not be empty.")
        result = run_stage(
            "extract",
            lambda: self._from_model(resume_text),
            lambda: fallback_extract(resume_text),
        )
        logger.info(
            "profile_extracted provenance=%s experience=%s skills=%s",
            result.provenance,
            len(result.value.experience),
            len(result.value.skills),
        )
        return result
