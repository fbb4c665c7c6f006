from __future__ import annotations

import logging
import os
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from typing import Any

from resume_optimizer.parsing import ParsedDoc
from resume_optimizer.pipeline import PipelineOutcome, StageResult
from resume_optimizer.schemas import (
    AnalysisRecord,
    MarketSalary,
    RecommendationsSummary,
    ResumeUpload,
    SkillsSummary,
)

logger = logging.getLogger(__name__)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS resumes (
        id TEXT PRIMARY KEY,
        user_id TEXT,
        filename TEXT NOT NULL,
        original_text TEXT NOT NULL,
        file_type TEXT NOT NULL,
        file_size INTEGER NOT NULL,
        uploaded_at TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS analyses (
        id TEXT PRIMARY KEY,
        resume_id TEXT NOT NULL REFERENCES resumes (id),
        record_json TEXT NOT NULL,
        seniority_level TEXT NOT NULL,
        dominant_domain TEXT,
        ats_score INTEGER NOT NULL,
        created_at TEXT NOT NULL
    );
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_analyses_resume_id
    ON analyses (resume_id);
    """,
    """
    CREATE TABLE IF NOT EXISTS stage_runs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created_at TEXT NOT NULL,
        analysis_id TEXT NOT NULL,
        stage TEXT NOT NULL,
        provenance TEXT NOT NULL,
        failure_code TEXT,
        latency_ms INTEGER,
        model TEXT NOT NULL
    );
    """,
)

_INSERT_STAGE_RUN = """
    INSERT INTO stage_runs (
        created_at, analysis_id, stage, provenance, failure_code, latency_ms, model
    ) VALUES (?, ?, ?, ?, ?, ?, ?)
"""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _stage_run_row(created_iso: str, analysis_id: str, result: StageResult, model: str) -> tuple:
    return (created_iso, analysis_id, result.stage, result.provenance, result.failure, result.latency_ms, model)


def build_analysis_record(
    *,
    analysis_id: str,
    resume_id: str,
    outcome: PipelineOutcome,
    created_at: datetime,
) -> AnalysisRecord:
    profile = outcome.profile
    classification = outcome.classification
    optimization = outcome.optimization
    top = classification.domains[0] if classification.domains else None
    return AnalysisRecord(
        id=analysis_id,
        resume_id=resume_id,
        seniority_level=classification.seniority_level,
        experience_years=classification.experience_years,
        dominant_domain=top.name if top else None,
        domain_confidence=top.confidence if top else None,
        ats_score=classification.ats_score,
        skills=SkillsSummary(
            current=profile.skills,
            to_highlight=optimization.skills_to_highlight,
            in_demand=optimization.skills_in_demand,
        ),
        recommendations=RecommendationsSummary(
            key=optimization.key_recommendations,
            content=optimization.content_suggestions,
        ),
        optimized_content=optimization.optimized_resume,
        market_salary=MarketSalary(),
        profile=profile,
        classification=classification,
        optimization=optimization,
        provenance=outcome.provenance,
        created_at=created_at,
    )


class AnalysisStore:
    """SQLite store for uploads, analyses and per-stage telemetry.

    One connection per store, shared across request threads and serialized
    by a lock. Records are written once and never updated.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._lock = threading.Lock()
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self._conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._conn.execute("PRAGMA busy_timeout=5000;")
        for statement in _SCHEMA:
            self._conn.execute(statement)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def create_resume(self, parsed: ParsedDoc, *, user_id: str | None = None) -> ResumeUpload:
        upload = ResumeUpload(
            id=uuid.uuid4().hex,
            user_id=user_id,
            filename=parsed.filename,
            original_text=parsed.text,
            file_type=parsed.content_type,
            file_size=parsed.size_bytes,
            uploaded_at=_utc_now(),
        )
        with self._lock:
            self._conn.execute(
                """
                INSERT INTO resumes (id, user_id, filename, original_text, file_type, file_size, uploaded_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    upload.id,
                    upload.user_id,
                    upload.filename,
                    upload.original_text,
                    upload.file_type,
                    upload.file_size,
                    upload.uploaded_at.isoformat(),
                ),
            )
        return upload

    def get_resume(self, resume_id: str) -> ResumeUpload | None:
        with self._lock:
            row = self._conn.execute(
                """
                SELECT id, user_id, filename, original_text, file_type, file_size, uploaded_at
                FROM resumes
                WHERE id = ?
                """,
                (resume_id,),
            ).fetchone()
        if not row:
            return None
        return ResumeUpload(
            id=row[0],
            user_id=row[1],
            filename=row[2],
            original_text=row[3],
            file_type=row[4],
            file_size=row[5],
            uploaded_at=datetime.fromisoformat(row[6]),
        )

    def create_analysis(self, resume_id: str, outcome: PipelineOutcome, *, model: str = "") -> AnalysisRecord:
        record = build_analysis_record(
            analysis_id=uuid.uuid4().hex,
            resume_id=resume_id,
            outcome=outcome,
            created_at=_utc_now(),
        )
        record_json = record.model_dump_json(by_alias=True)
        created_iso = record.created_at.isoformat()
        with self._lock:
            cursor = self._conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            try:
                cursor.execute(
                    """
                    INSERT INTO analyses (
                        id, resume_id, record_json, seniority_level, dominant_domain, ats_score, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.id,
                        resume_id,
                        record_json,
                        record.seniority_level,
                        record.dominant_domain,
                        record.ats_score,
                        created_iso,
                    ),
                )
                cursor.executemany(
                    _INSERT_STAGE_RUN,
                    [_stage_run_row(created_iso, record.id, stage, model) for stage in outcome.stages],
                )
                cursor.execute("COMMIT")
            except Exception:
                cursor.execute("ROLLBACK")
                raise
        logger.info("analysis_stored id=%s resume_id=%s provenance=%s", record.id, resume_id, record.provenance)
        return record

    def get_analysis(self, analysis_id: str) -> AnalysisRecord | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT record_json FROM analyses WHERE id = ?",
                (analysis_id,),
            ).fetchone()
        if not row:
            return None
        return AnalysisRecord.model_validate_json(row[0])

    def get_analysis_by_resume(self, resume_id: str) -> AnalysisRecord | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT record_json FROM analyses WHERE resume_id = ? ORDER BY created_at DESC LIMIT 1",
                (resume_id,),
            ).fetchone()
        if not row:
            return None
        return AnalysisRecord.model_validate_json(row[0])

    def log_stage_run(self, analysis_id: str, result: StageResult, *, model: str = "") -> None:
        with self._lock:
            self._conn.execute(_INSERT_STAGE_RUN, _stage_run_row(_utc_now().isoformat(), analysis_id, result, model))

    def list_stage_runs(self, analysis_id: str) -> list[dict[str, Any]]:
        with self._lock:
            rows = self._conn.execute(
                """
                SELECT stage, provenance, failure_code, latency_ms, model, created_at
                FROM stage_runs
                WHERE analysis_id = ?
                ORDER BY id
                """,
                (analysis_id,),
            ).fetchall()
        return [
            {
                "stage": row[0],
                "provenance": row[1],
                "failure_code": row[2],
                "latency_ms": row[3],
                "model": row[4],
                "created_at": row[5],
            }
            for row in rows
        ]
