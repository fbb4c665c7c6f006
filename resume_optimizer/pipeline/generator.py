from __future__ import annotations

import logging

from resume_optimizer.ai.types import ModelClient
from resume_optimizer.schemas import (
    CandidateProfile,
    ContentSuggestion,
    DomainClassification,
    OptimizationResult,
    Recommendation,
)

from .heuristics import get_heuristic_value
from .prompts import optimization_messages
from .stage import StageResult, parse_model_output, run_stage

logger = logging.getLogger(__name__)

FALLBACK_RECOMMENDATIONS = (
    Recommendation(
        title="Quantify Your Impact",
        description="Add specific metrics and numbers to your achievements to demonstrate measurable impact.",
        impact="High",
    ),
    Recommendation(
        title="Highlight Design Systems Experience",
        description="Emphasize your experience with design systems and component libraries.",
        impact="High",
    ),
    Recommendation(
        title="Include User Research Methods",
        description="Specify the user research methodologies you've used in your projects.",
        impact="Medium",
    ),
    Recommendation(
        title="Add Collaboration Examples",
        description="Include examples of cross-functional collaboration with engineering and product teams.",
        impact="Medium",
    ),
)

FALLBACK_SKILLS_TO_HIGHLIGHT = ("Design Systems", "User Research", "Prototyping", "A/B Testing")
FALLBACK_SKILLS_IN_DEMAND = ("Figma", "React", "Design Tokens", "Accessibility", "Data-Driven Design")

FALLBACK_CONTENT_SUGGESTION = ContentSuggestion(
    section="Experience",
    current="Designed user interfaces",
    improved=(
        "Designed and implemented user interfaces that increased user engagement by 25% "
        "through iterative testing and data analysis"
    ),
    reasoning="Added quantifiable metrics and process details",
)

_EXPERIENCE_BULLETS = (
    "• Led end-to-end product design resulting in improved user experience",
    "• Collaborated with cross-functional teams to deliver user-centered solutions",
    "• Utilized data-driven design principles to optimize conversion rates",
)
_SUPPLEMENTARY_SKILLS = ("Design Systems", "User Research", "A/B Testing", "Accessibility")


def resolve_target_domain(classification: DomainClassification, target_domain: str | None = None) -> str:
    if target_domain and target_domain.strip():
        return target_domain.strip()
    if classification.domains and classification.domains[0].name:
        return classification.domains[0].name
    return str(get_heuristic_value("generator.default_target_domain", "B2B SaaS"))


def render_optimized_resume(profile: CandidateProfile, classification: DomainClassification) -> str:
    """Build the plain-text resume used when the model cannot rewrite it.

    Experience bullets are generic; the entry's own description and
    achievements are not carried over.
    """
    info = profile.personal_info
    lines = [info.name or ""]
    for value in (info.email, info.phone, info.linkedin):
        if value:
            lines.append(value)

    lines.extend(["", f"{classification.seniority_level} Product Designer", "", "PROFESSIONAL EXPERIENCE", ""])
    for entry in profile.experience:
        lines.extend([entry.title, entry.company, entry.duration])
        lines.extend(_EXPERIENCE_BULLETS)
        lines.append("")

    lines.append("CORE SKILLS")
    lines.append(", ".join([*profile.skills, *_SUPPLEMENTARY_SKILLS]))
    return "\n".join(lines) + "\n\n"


def fallback_generate(profile: CandidateProfile, classification: DomainClassification) -> OptimizationResult:
    return OptimizationResult(
        key_recommendations=list(FALLBACK_RECOMMENDATIONS),
        skills_to_highlight=list(FALLBACK_SKILLS_TO_HIGHLIGHT),
        skills_in_demand=list(FALLBACK_SKILLS_IN_DEMAND),
        content_suggestions=[FALLBACK_CONTENT_SUGGESTION],
        optimized_resume=render_optimized_resume(profile, classification),
    )


class OptimizationGenerator:
    def __init__(self, client: ModelClient, *, max_output_tokens: int | None = None):
        self._client = client
        self._max_output_tokens = max_output_tokens

    def _from_model(
        self,
        profile: CandidateProfile,
        classification: DomainClassification,
        target_domain: str,
    ) -> OptimizationResult:
        messages = optimization_messages(profile, classification, target_domain)
        raw = self._client.complete(messages, max_output_tokens=self._max_output_tokens)
        return parse_model_output(raw, OptimizationResult)

    def generate(
        self,
        profile: CandidateProfile,
        classification: DomainClassification,
        target_domain: str | None = None,
    ) -> StageResult[OptimizationResult]:
        domain = resolve_target_domain(classification, target_domain)
        result = run_stage(
            "generate",
            lambda: self._from_model(profile, classification, domain),
            lambda: fallback_generate(profile, classification),
        )
        logger.info(
            "optimizations_generated provenance=%s target_domain=%s recommendations=%s",
            result.provenance,
            domain,
            len(result.value.key_recommendations),
        )
        return result
