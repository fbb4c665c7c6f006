import asyncio
import logging
import sqlite3

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status
from pydantic import ValidationError

from resume_optimizer.core.rate_limit import rate_limit
from resume_optimizer.core.services import get_services
from resume_optimizer.parsing import UnsupportedUploadError, decode_upload
from resume_optimizer.pipeline import EmptyResumeError
from resume_optimizer.schemas import AnalyzeResponse

logger = logging.getLogger(__name__)

router = APIRouter()

_READ_CHUNK_BYTES = 1024 * 64


async def _read_limited(file: UploadFile, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File exceeds the {max_bytes} byte upload limit.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/analyze", response_model=AnalyzeResponse)
@rate_limit()
async def analyze_resume(
    request: Request,
    resume: UploadFile | None = File(default=None),
    target_domain: str | None = Form(default=None, alias="targetDomain"),
):
    services = get_services(request)
    if resume is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    filename = resume.filename or "uploaded-file"
    content = await _read_limited(resume, services.max_upload_bytes)
    try:
        parsed = decode_upload(filename, content, resume.content_type)
    except UnsupportedUploadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not parsed.text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Could not extract text from file")

    try:
        upload = services.store.create_resume(parsed)
        outcome = await asyncio.to_thread(services.pipeline.run, parsed.text, target_domain)
        record = services.store.create_analysis(upload.id, outcome, model=services.pipeline.client.model)
    except EmptyResumeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except (sqlite3.Error, ValidationError) as exc:
        logger.exception("analysis_failed file=%s", filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to analyze resume",
        ) from exc

    return AnalyzeResponse.from_record(record)
