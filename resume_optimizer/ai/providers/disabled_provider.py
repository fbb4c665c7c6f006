from typing import Sequence

from resume_optimizer.ai.errors import ModelUnavailableError
from resume_optimizer.ai.types import ChatMessage


class DisabledProvider:
    def __init__(self, model: str, reason: str = "llm_disabled"):
        self.model = model
        self._reason = reason

    def complete(self, messages: Sequence[ChatMessage], *, max_output_tokens: int | None = None) -> str:
        raise ModelUnavailableError("Model calls are disabled for this process.", code=self._reason)
