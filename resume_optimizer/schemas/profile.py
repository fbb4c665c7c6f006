from __future__ import annotations

from pydantic import Field, StrictStr

from .base import StrictWireModel, WireModel


class PersonalInfo(WireModel):
    name: StrictStr | None = None
    email: StrictStr | None = None
    phone: StrictStr | None = None
    location: StrictStr | None = None
    linkedin: StrictStr | None = None
    portfolio: StrictStr | None = None


class ExperienceEntry(WireModel):
    title: str
    company: str
    duration: str
    description: str
    achievements: list[str] = Field(default_factory=list)


class EducationEntry(WireModel):
    degree: str
    institution: str
    year: str


class ProjectEntry(WireModel):
    name: str
    description: str
    technologies: list[str] = Field(default_factory=list)


class CandidateProfile(StrictWireModel):
    personal_info: PersonalInfo
    experience: list[ExperienceEntry]
    education: list[EducationEntry]
    skills: list[str]
    projects: list[ProjectEntry]
