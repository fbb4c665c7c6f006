from __future__ import annotations

import math
from typing import Annotated, Any, Literal, Union

from pydantic import Field, field_validator

from .base import StrictWireModel, WireModel

SeniorityLevel = Literal["Junior", "Mid", "Senior", "Staff", "Principal"]

# Whole years stay integers on the wire; inf and NaN never validate.
ExperienceYears = Union[
    Annotated[int, Field(ge=0)],
    Annotated[float, Field(ge=0, allow_inf_nan=False)],
]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class DomainMatch(WireModel):
    name: str
    confidence: float = Field(allow_inf_nan=False)
    reasoning: str

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return _clamp(value, 0.0, 100.0)


class DomainClassification(StrictWireModel):
    domains: list[DomainMatch] = Field(min_length=1)
    seniority_level: SeniorityLevel
    experience_years: ExperienceYears
    ats_score: int = Field(ge=0, le=100)

    @field_validator("domains")
    @classmethod
    def _sort_domains(cls, value: list[DomainMatch]) -> list[DomainMatch]:
        return sorted(value, key=lambda match: match.confidence, reverse=True)

    @field_validator("ats_score", mode="before")
    @classmethod
    def _clamp_ats_score(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value
        if isinstance(value, float) and not math.isfinite(value):
            return value
        return int(round(_clamp(float(value), 0.0, 100.0)))

    @property
    def top_domain(self) -> DomainMatch:
        return self.domains[0]
