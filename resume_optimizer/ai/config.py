from dataclasses import dataclass

from resume_optimizer.core.config import Settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    enabled: bool
    api_key: str
    base_url: str | None
    timeout_s: float
    max_retries: int
    max_output_tokens: int
    temperature: float


def load_ai_config(settings: Settings) -> AIConfig:
    return AIConfig(
        provider=settings.ai_provider,
        model=settings.ai_model,
        enabled=settings.llm_enabled,
        api_key=(settings.openai_api_key or "").strip(),
        base_url=settings.openai_base_url,
        timeout_s=settings.model_timeout_s,
        max_retries=settings.model_max_retries,
        max_output_tokens=settings.model_max_output_tokens,
        temperature=settings.model_temperature,
    )
