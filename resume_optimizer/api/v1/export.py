import logging
import sqlite3

from fastapi import APIRouter, HTTPException, Request, Response, status
from pydantic import ValidationError

from resume_optimizer.core.services import get_services
from resume_optimizer.export import parse_export_format, render_export

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/export/{analysis_id}/{export_format}")
async def export_resume(request: Request, analysis_id: str, export_format: str):
    services = get_services(request)
    try:
        record = services.store.get_analysis(analysis_id)
    except (sqlite3.Error, ValidationError) as exc:
        logger.exception("export_failed id=%s", analysis_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to export resume",
        ) from exc
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Analysis not found")

    try:
        fmt = parse_export_format(export_format)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported format") from exc

    payload = render_export(fmt, record.optimized_content)
    return Response(
        content=payload.content,
        media_type=payload.media_type,
        headers={"Content-Disposition": payload.content_disposition},
    )
