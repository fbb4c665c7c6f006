from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    ai_provider: str
    ai_model: str
    openai_api_key: str | None
    openai_base_url: str | None
    llm_enabled: bool
    model_timeout_s: float
    model_max_retries: int
    model_max_output_tokens: int
    model_temperature: float
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    rate_limit: str
    rate_limit_enabled: bool
    analysis_db_path: str
    max_upload_bytes: int


def load_settings() -> Settings:
    return Settings(
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        ai_model=(_get_env("AI_MODEL", "gpt-4o-mini") or "gpt-4o-mini").strip(),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        llm_enabled=_get_env_bool("LLM_ENABLED", True),
        model_timeout_s=_get_env_float("MODEL_TIMEOUT_S", 30.0),
        model_max_retries=_get_env_int("MODEL_MAX_RETRIES", 0),
        model_max_output_tokens=_get_env_int("MODEL_MAX_OUTPUT_TOKENS", 4000),
        model_temperature=_get_env_float("MODEL_TEMPERATURE", 0.2),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        cors_allowed_origins=_get_env_list(
            "CORS_ALLOWED_ORIGINS",
            [
                "http://localhost:5173",
                "http://127.0.0.1:5173",
                "http://localhost:3000",
            ],
        ),
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        analysis_db_path=_get_env("ANALYSIS_DB_PATH", "data/analysis.db") or "data/analysis.db",
        max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
    )


settings = load_settings()

if settings.ai_provider not in {"openai", "disabled"}:
    raise RuntimeError("AI_PROVIDER must be either 'openai' or 'disabled'.")
