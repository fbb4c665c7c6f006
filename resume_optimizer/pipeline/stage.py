"""Shared contract for the three pipeline stages.

Every stage has a model arm and a deterministic fallback arm. The model arm
must produce JSON that validates against the stage's pydantic model exactly;
anything else is a ``ModelResponseError`` and the fallback arm runs instead.
The outcome is wrapped in a ``StageResult`` tagged with its provenance.
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, Generic, Literal, TypeVar

from pydantic import BaseModel, ValidationError

from resume_optimizer.ai.errors import ModelError, ModelResponseError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

StageName = Literal["extract", "classify", "generate"]

_CODE_FENCE_OPEN = re.compile(r"^```(?:json)?\s*")
_CODE_FENCE_CLOSE = re.compile(r"\s*```$")


@dataclass(frozen=True)
class StageResult(Generic[T]):
    stage: StageName
    value: T
    provenance: Literal["model", "fallback"]
    failure: str | None = None
    latency_ms: int = 0

    @property
    def from_model(self) -> bool:
        return self.provenance == "model"


def parse_model_output(raw_text: str, model_cls: type[M]) -> M:
    raw = (raw_text or "").strip()
    if raw.startswith("```"):
        raw = _CODE_FENCE_OPEN.sub("", raw)
        raw = _CODE_FENCE_CLOSE.sub("", raw)
    if not raw:
        raise ModelResponseError("Model returned an empty response.", code="empty_response")
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ModelResponseError(f"Model response is not valid JSON: {exc}", code="invalid_json") from exc
    if not isinstance(parsed, dict):
        raise ModelResponseError("Model response is not a JSON object.", code="not_an_object")
    try:
        return model_cls.model_validate(parsed)
    except ValidationError as exc:
        raise ModelResponseError(
            f"Model response does not match {model_cls.__name__}: {exc.error_count()} errors",
            code="schema_mismatch",
        ) from exc


def run_stage(
    stage: StageName,
    call_model: Callable[[], T],
    fallback: Callable[[], T],
) -> StageResult[T]:
    started = time.perf_counter()
    try:
        value = call_model()
    except ModelError as exc:
        failure = exc.code
        logger.warning("stage_model_failed stage=%s code=%s: %s", stage, exc.code, exc)
    except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
        failure = "unexpected_error"
        logger.warning("stage_model_failed stage=%s code=%s: %s", stage, failure, exc, exc_info=True)
    else:
        return StageResult(
            stage=stage,
            value=value,
            provenance="model",
            latency_ms=int((time.perf_counter() - started) * 1000),
        )

    value = fallback()
    return StageResult(
        stage=stage,
        value=value,
        provenance="fallback",
        failure=failure,
        latency_ms=int((time.perf_counter() - started) * 1000),
    )
