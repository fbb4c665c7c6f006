from __future__ import annotations

import logging
from typing import Optional, Sequence

from openai import APIStatusError, APITimeoutError, OpenAI, OpenAIError

from resume_optimizer.ai.errors import ModelUnavailableError
from resume_optimizer.ai.types import ChatMessage

logger = logging.getLogger(__name__)


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        temperature: float = 0.2,
        max_output_tokens: int = 4000,
    ):
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY is missing")
        self.model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        # One client per process; the SDK client is safe to share across threads.
        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url or None,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    def complete(self, messages: Sequence[ChatMessage], *, max_output_tokens: int | None = None) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=self._temperature,
                response_format={"type": "json_object"},
                max_tokens=max_output_tokens or self._max_output_tokens,
            )
        except APITimeoutError as exc:
            raise ModelUnavailableError(f"Model call timed out: {exc}", code="timeout") from exc
        except APIStatusError as exc:
            raise ModelUnavailableError(
                f"Model call failed with status {exc.status_code}", code=f"http_{exc.status_code}"
            ) from exc
        except OpenAIError as exc:
            raise ModelUnavailableError(f"Model call failed: {exc}", code="llm_exception") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
