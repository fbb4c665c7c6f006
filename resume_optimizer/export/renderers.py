from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class ExportFormat(str, Enum):
    PDF = "pdf"
    TXT = "txt"
    DOCX = "docx"


@dataclass(frozen=True)
class ExportPayload:
    content: bytes
    media_type: str
    filename: str

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


Renderer = Callable[[str], ExportPayload]


def _text_passthrough(fmt: ExportFormat, media_type: str) -> Renderer:
    # No document conversion yet: every format carries the optimized text as UTF-8.
    def render(text: str) -> ExportPayload:
        return ExportPayload(
            content=(text or "").encode("utf-8"),
            media_type=media_type,
            filename=f"optimized_resume.{fmt.value}",
        )

    return render


_RENDERERS: dict[ExportFormat, Renderer] = {
    ExportFormat.PDF: _text_passthrough(ExportFormat.PDF, "application/pdf"),
    ExportFormat.TXT: _text_passthrough(ExportFormat.TXT, "text/plain"),
    ExportFormat.DOCX: _text_passthrough(
        ExportFormat.DOCX,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ),
}


def parse_export_format(raw: str) -> ExportFormat:
    try:
        return ExportFormat((raw or "").strip().lower())
    except ValueError as exc:
        raise ValueError(f"Unsupported format '{raw}'.") from exc


def render_export(fmt: ExportFormat, text: str) -> ExportPayload:
    return _RENDERERS[fmt](text)
