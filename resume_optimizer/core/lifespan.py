from contextlib import asynccontextmanager
import logging

from resume_optimizer.core.config import settings
from resume_optimizer.core.services import build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    owned = getattr(app.state, "services", None) is None
    if owned:
        app.state.services = build_services(settings)
    yield
    if owned:
        app.state.services.store.close()
        app.state.services = None
        logger.info("services_closed")
