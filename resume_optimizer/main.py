import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from resume_optimizer.api.v1.analysis import router as analysis_router
from resume_optimizer.api.v1.analyze import router as analyze_router
from resume_optimizer.api.v1.export import router as export_router
from resume_optimizer.api.v1.health import router as health_router
from resume_optimizer.core.config import settings
from resume_optimizer.core.cors import cors_allowed_origins
from resume_optimizer.core.lifespan import lifespan
from resume_optimizer.core.rate_limit import limiter
from resume_optimizer.core.services import AppServices

logging.basicConfig(level=settings.log_level, format="%(asctime)s | %(name)s | %(levelname)s | %(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)


def create_app(services: AppServices | None = None) -> FastAPI:
    """Build the API. Passing ``services`` skips building them from settings."""
    app = FastAPI(title="Resume Optimizer API", version="0.1.0", lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.include_router(health_router, prefix="/api", tags=["Health"])
    app.include_router(analyze_router, prefix="/api", tags=["Analyze"])
    app.include_router(analysis_router, prefix="/api", tags=["Analysis"])
    app.include_router(export_router, prefix="/api", tags=["Export"])
    return app


app = create_app()
