from __future__ import annotations

from typing import Literal

from .base import StrictWireModel, WireModel

Impact = Literal["High", "Medium", "Low"]


class Recommendation(WireModel):
    title: str
    description: str
    impact: Impact


class ContentSuggestion(WireModel):
    section: str
    current: str
    improved: str
    reasoning: str


class OptimizationResult(StrictWireModel):
    key_recommendations: list[Recommendation]
    skills_to_highlight: list[str]
    skills_in_demand: list[str]
    content_suggestions: list[ContentSuggestion]
    optimized_resume: str
