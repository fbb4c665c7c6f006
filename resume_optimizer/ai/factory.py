import logging

from resume_optimizer.ai.config import AIConfig
from resume_optimizer.ai.types import ModelClient

from resume_optimizer.ai.providers.disabled_provider import DisabledProvider
from resume_optimizer.ai.providers.openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def get_ai_client(cfg: AIConfig) -> ModelClient:
    if not cfg.enabled or cfg.provider == "disabled":
        return DisabledProvider(model=cfg.model, reason="llm_disabled")

    if cfg.provider == "openai":
        if not cfg.api_key or _looks_like_placeholder(cfg.api_key):
            logger.warning("ai_client_unconfigured provider=%s; stages will use fallbacks", cfg.provider)
            return DisabledProvider(model=cfg.model, reason="missing_api_key")
        return OpenAIProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
            temperature=cfg.temperature,
            max_output_tokens=cfg.max_output_tokens,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
