from __future__ import annotations

import logging
from typing import Any

from resume_optimizer.ai.types import ModelClient
from resume_optimizer.schemas import CandidateProfile, DomainClassification, DomainMatch

from .heuristics import get_heuristic_value
from .prompts import classification_messages
from .stage import StageResult, parse_model_output, run_stage

logger = logging.getLogger(__name__)

_DEFAULT_SENIORITY_BANDS: list[list[Any]] = [[1, "Junior", 1], [3, "Mid", 3], [5, "Senior", 5], [None, "Staff", 7]]


def _profile_text(profile: CandidateProfile) -> str:
    experience_text = " ".join(entry.description for entry in profile.experience).lower()
    skills_text = " ".join(profile.skills).lower()
    return f"{experience_text} {skills_text}"


def _domain_scores(text: str) -> dict[str, int]:
    domains: dict[str, list[str]] = get_heuristic_value("classifier.domains", {}) or {}
    bonus = int(get_heuristic_value("classifier.keyword_bonus", 30))
    scores: dict[str, int] = {}
    for domain, keywords in domains.items():
        # Presence, not frequency: one hit is worth the same as ten.
        hit = any(keyword in text for keyword in (keywords or []))
        scores[domain] = bonus if hit else 0
    return scores


def _seniority_for(experience_count: int) -> tuple[str, int]:
    bands = get_heuristic_value("classifier.seniority_bands", _DEFAULT_SENIORITY_BANDS)
    for upper, level, years in bands:
        if upper is None or experience_count <= upper:
            return str(level), int(years)
    _, level, years = bands[-1]
    return str(level), int(years)


def _ats_score(skill_count: int, experience_count: int) -> int:
    base = int(get_heuristic_value("classifier.ats.base", 60))
    per_skill = int(get_heuristic_value("classifier.ats.per_skill", 2))
    per_experience = int(get_heuristic_value("classifier.ats.per_experience", 5))
    cap = int(get_heuristic_value("classifier.ats.cap", 90))
    return min(cap, base + per_skill * skill_count + per_experience * experience_count)


def fallback_classify(profile: CandidateProfile) -> DomainClassification:
    scores = _domain_scores(_profile_text(profile))
    if scores and max(scores.values()) == 0:
        default_domain = str(get_heuristic_value("classifier.default_domain", "B2B SaaS"))
        scores[default_domain] = int(get_heuristic_value("classifier.default_domain_score", 75))

    floor = int(get_heuristic_value("classifier.confidence_floor", 25))
    reasoning = str(get_heuristic_value("classifier.reasoning", "Based on keyword analysis and experience content"))
    experience_count = len(profile.experience)
    seniority_level, experience_years = _seniority_for(experience_count)

    return DomainClassification(
        domains=[
            DomainMatch(name=name, confidence=max(score, floor), reasoning=reasoning)
            for name, score in scores.items()
        ],
        seniority_level=seniority_level,
        experience_years=experience_years,
        ats_score=_ats_score(len(profile.skills), experience_count),
    )


class DomainClassifier:
    def __init__(self, client: ModelClient, *, max_output_tokens: int | None = None):
        self._client = client
        self._max_output_tokens = max_output_tokens

    def _from_model(self, profile: CandidateProfile) -> DomainClassification:
        raw = self._client.complete(classification_messages(profile), max_output_tokens=self._max_output_tokens)
        return parse_model_output(raw, DomainClassification)

    def classify(self, profile: CandidateProfile) -> StageResult[DomainClassification]:
        result = run_stage(
            "classify",
            lambda: self._from_model(profile),
            lambda: fallback_classify(profile),
        )
        top = result.value.top_domain
        logger.info(
            "domain_classified provenance=%s domain=%s confidence=%s seniority=%s ats=%s",
            result.provenance,
            top.name,
            top.confidence,
            result.value.seniority_level,
            result.value.ats_score,
        )
        return result
