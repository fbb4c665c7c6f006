from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from .base import WireModel
from .classification import DomainClassification, DomainMatch, ExperienceYears, SeniorityLevel
from .optimization import ContentSuggestion, OptimizationResult, Recommendation
from .profile import CandidateProfile

Provenance = Literal["model", "fallback"]


class MarketSalary(WireModel):
    estimated: int = 120000
    currency: str = "USD"
    location: str = "San Francisco"


class SkillsSummary(WireModel):
    current: list[str] = Field(default_factory=list)
    to_highlight: list[str] = Field(default_factory=list)
    in_demand: list[str] = Field(default_factory=list)


class RecommendationsSummary(WireModel):
    key: list[Recommendation] = Field(default_factory=list)
    content: list[ContentSuggestion] = Field(default_factory=list)


class ResumeUpload(WireModel):
    id: str
    user_id: str | None = None
    filename: str
    original_text: str
    file_type: str
    file_size: int
    uploaded_at: datetime


class AnalysisRecord(WireModel):
    id: str
    resume_id: str
    seniority_level: SeniorityLevel
    experience_years: ExperienceYears
    dominant_domain: str | None = None
    domain_confidence: float | None = None
    ats_score: int
    skills: SkillsSummary
    recommendations: RecommendationsSummary
    optimized_content: str
    market_salary: MarketSalary = Field(default_factory=MarketSalary)
    profile: CandidateProfile
    classification: DomainClassification
    optimization: OptimizationResult
    provenance: dict[str, Provenance] = Field(default_factory=dict)
    created_at: datetime


class AnalyzeResults(WireModel):
    ats_score: int
    seniority_level: SeniorityLevel
    experience_years: ExperienceYears
    domains: list[DomainMatch]
    recommendations: list[Recommendation]
    skills: SkillsSummary
    content_suggestions: list[ContentSuggestion]
    optimized_resume: str
    market_salary: MarketSalary


class AnalyzeResponse(WireModel):
    success: bool = True
    resume_id: str
    analysis_id: str
    results: AnalyzeResults
    provenance: dict[str, Provenance] = Field(default_factory=dict)

    @classmethod
    def from_record(cls, record: AnalysisRecord) -> "AnalyzeResponse":
        return cls(
            resume_id=record.resume_id,
            analysis_id=record.id,
            results=AnalyzeResults(
                ats_score=record.ats_score,
                seniority_level=record.seniority_level,
                experience_years=record.experience_years,
                domains=record.classification.domains,
                recommendations=record.recommendations.key,
                skills=record.skills,
                content_suggestions=record.recommendations.content,
                optimized_resume=record.optimized_content,
                market_salary=record.market_salary,
            ),
            provenance=record.provenance,
        )
