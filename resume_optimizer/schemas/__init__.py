from .analysis import (
    AnalysisRecord,
    AnalyzeResponse,
    AnalyzeResults,
    MarketSalary,
    Provenance,
    RecommendationsSummary,
    ResumeUpload,
    SkillsSummary,
)
from .classification import DomainClassification, DomainMatch, ExperienceYears, SeniorityLevel
from .optimization import ContentSuggestion, Impact, OptimizationResult, Recommendation
from .profile import CandidateProfile, EducationEntry, ExperienceEntry, PersonalInfo, ProjectEntry

__all__ = [
    "PersonalInfo",
    "ExperienceEntry",
    "EducationEntry",
    "ProjectEntry",
    "CandidateProfile",
    "DomainMatch",
    "DomainClassification",
    "SeniorityLevel",
    "ExperienceYears",
    "Impact",
    "Recommendation",
    "ContentSuggestion",
    "OptimizationResult",
    "Provenance",
    "MarketSalary",
    "SkillsSummary",
    "RecommendationsSummary",
    "ResumeUpload",
    "AnalysisRecord",
    "AnalyzeResults",
    "AnalyzeResponse",
]
