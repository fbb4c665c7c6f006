from __future__ import annotations

import json

from pydantic import BaseModel

from resume_optimizer.ai.types import ChatMessage

EXTRACTION_SYSTEM_PROMPT = """You are an expert resume parser for product designers.
Parse the provided resume text and extract structured data. Focus on design-specific
experience, tools, and achievements.

Return only a JSON object (no markdown, no code block) with exactly these top-level keys:
{
  "personalInfo": {
    "name": "string",
    "email": "string",
    "phone": "string",
    "location": "string",
    "linkedin": "string",
    "portfolio": "string"
  },
  "experience": [
    {
      "title": "string",
      "company": "string",
      "duration": "string",
      "description": "string",
      "achievements": ["string"]
    }
  ],
  "education": [
    {"degree": "string", "institution": "string", "year": "string"}
  ],
  "skills": ["string"],
  "projects": [
    {"name": "string", "description": "string", "technologies": ["string"]}
  ]
}
Use null for personal details that are not present and empty strings for unknown
experience or education fields. Do not add other top-level keys."""

CLASSIFICATION_SYSTEM_PROMPT = """You are an expert product design career advisor.
Analyze the provided resume data to determine:
1. Best domain matches for this designer (B2B SaaS, Fintech, E-commerce, Healthcare, EdTech, etc.)
2. Seniority level based on experience and responsibilities
3. Years of experience
4. ATS score based on keyword density and formatting

Return only a JSON object (no markdown, no code block) with exactly this structure:
{
  "domains": [
    {"name": "string", "confidence": number (0-100), "reasoning": "string"}
  ],
  "seniorityLevel": "Junior|Mid|Senior|Staff|Principal",
  "experienceYears": number,
  "atsScore": number (0-100)
}
List domains from best to worst match and include at least one."""

OPTIMIZATION_SYSTEM_PROMPT = """You are an expert resume optimization specialist for product designers.
Based on the resume data and domain analysis, provide specific optimization recommendations.

Focus on:
- Quantifying achievements with metrics
- Highlighting relevant design tools and methodologies
- Emphasizing systems thinking and scalability
- Including user research and data-driven design
- ATS optimization while maintaining readability

Return only a JSON object (no markdown, no code block) with exactly this structure:
{
  "keyRecommendations": [
    {"title": "string", "description": "string", "impact": "High|Medium|Low"}
  ],
  "skillsToHighlight": ["string"],
  "skillsInDemand": ["string"],
  "contentSuggestions": [
    {"section": "string", "current": "string", "improved": "string", "reasoning": "string"}
  ],
  "optimizedResume": "full optimized resume text"
}"""


def to_prompt_json(model: BaseModel) -> str:
    return json.dumps(model.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)


def extraction_messages(resume_text: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=EXTRACTION_SYSTEM_PROMPT),
        ChatMessage(role="user", content=f"Parse this product designer resume:\n\n{resume_text}"),
    ]


def classification_messages(profile: BaseModel) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=CLASSIFICATION_SYSTEM_PROMPT),
        ChatMessage(role="user", content=f"Analyze this designer's profile:\n\n{to_prompt_json(profile)}"),
    ]


def optimization_messages(profile: BaseModel, classification: BaseModel, target_domain: str) -> list[ChatMessage]:
    user_prompt = (
        f"Optimize this resume for {target_domain} product design roles:\n\n"
        f"Resume Data:\n{to_prompt_json(profile)}\n\n"
        f"Analysis:\n{to_prompt_json(classification)}"
    )
    return [
        ChatMessage(role="system", content=OPTIMIZATION_SYSTEM_PROMPT),
        ChatMessage(role="user", content=user_prompt),
    ]
