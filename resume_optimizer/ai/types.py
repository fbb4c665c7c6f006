from dataclasses import dataclass
from typing import Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class ModelClient(Protocol):
    model: str

    def complete(self, messages: Sequence[ChatMessage], *, max_output_tokens: int | None = None) -> str: ...
