from __future__ import annotations

import json
from typing import Any, Sequence

from resume_optimizer.ai.errors import ModelUnavailableError
from resume_optimizer.ai.types import ChatMessage


class ScriptedModelClient:
    """Returns queued replies in order; an Exception reply is raised instead."""

    model = "scripted-model"

    def __init__(self, *replies: Any):
        self._replies = list(replies)
        self.calls: list[list[ChatMessage]] = []
        self.token_limits: list[int | None] = []

    def complete(self, messages: Sequence[ChatMessage], *, max_output_tokens: int | None = None) -> str:
        self.calls.append(list(messages))
        self.token_limits.append(max_output_tokens)
        if not self._replies:
            raise ModelUnavailableError("No scripted reply left.", code="llm_disabled")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, (dict, list)):
            return json.dumps(reply)
        return str(reply)


class OfflineModelClient(ScriptedModelClient):
    """Every call fails, so every stage takes its fallback."""

    model = "offline"


JANE_RESUME = "Jane Doe\njane@x.com\nProduct Designer\nAcme Corp\nFigma expert"

MODEL_PROFILE = {
    "personalInfo": {
        "name": "Alex Rivera",
        "email": "alex@example.com",
        "phone": "+1 555 010 2000",
        "location": "Austin, TX",
        "linkedin": "linkedin.com/in/alexrivera",
        "portfolio": None,
    },
    "experience": [
        {
            "title": "Senior Product Designer",
            "company": "Ledgerly",
            "duration": "2020 - Present",
            "description": "Led design for a banking dashboard used by enterprise finance teams.",
            "achievements": ["Cut onboarding time by 30%"],
        }
    ],
    "education": [{"degree": "BFA Interaction Design", "institution": "SCAD", "year": "2015"}],
    "skills": ["Figma", "Design Systems"],
    "projects": [{"name": "Atlas", "description": "Component library", "technologies": ["Figma", "React"]}],
}

MODEL_CLASSIFICATION = {
    "domains": [
        {"name": "B2B SaaS", "confidence": 70, "reasoning": "Enterprise dashboards"},
        {"name": "Fintech", "confidence": 140, "reasoning": "Banking products"},
    ],
    "seniorityLevel": "Principal",
    "experienceYears": 11,
    "atsScore": 97,
}

MODEL_OPTIMIZATION = {
    "keyRecommendations": [
        {"title": "Lead with outcomes", "description": "Open each role with a metric.", "impact": "High"}
    ],
    "skillsToHighlight": ["Design Systems"],
    "skillsInDemand": ["Design Tokens"],
    "contentSuggestions": [
        {
            "section": "Experience",
            "current": "Led design for a banking dashboard",
            "improved": "Led design for a banking dashboard adopted by 40 enterprise customers",
            "reasoning": "Adds scale",
        }
    ],
    "optimizedResume": "ALEX RIVERA\nPrincipal Product Designer",
}
