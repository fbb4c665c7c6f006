import logging
import sqlite3

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import ValidationError

from resume_optimizer.core.services import get_services
from resume_optimizer.schemas import AnalysisRecord

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/analysis/{analysis_id}", response_model=AnalysisRecord)
async def get_analysis(request: Request, analysis_id: str):
    services = get_services(request)
    try:
        record = services.store.get_analysis(analysis_id)
    except (sqlite3.Error, ValidationError) as exc:
        logger.exception("analysis_lookup_failed id=%s", analysis_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve analysis",
        ) from exc
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Analysis not found")
    return record
