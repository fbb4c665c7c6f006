from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from resume_optimizer.ai.config import load_ai_config
from resume_optimizer.ai.factory import get_ai_client
from resume_optimizer.core.analysis_store import AnalysisStore
from resume_optimizer.core.config import Settings
from resume_optimizer.pipeline import AnalysisPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppServices:
    pipeline: AnalysisPipeline
    store: AnalysisStore
    max_upload_bytes: int


def build_services(settings: Settings) -> AppServices:
    client = get_ai_client(load_ai_config(settings))
    logger.info("services_built provider=%s model=%s db=%s", settings.ai_provider, client.model, settings.analysis_db_path)
    return AppServices(
        pipeline=AnalysisPipeline(client, max_output_tokens=settings.model_max_output_tokens),
        store=AnalysisStore(settings.analysis_db_path),
        max_upload_bytes=settings.max_upload_bytes,
    )


def get_services(request: Request) -> AppServices:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Application services are not initialised.")
    return services
