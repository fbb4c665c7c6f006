from __future__ import annotations

import logging
from io import BytesIO

from .models import ParsedDoc

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")
UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")

CONTENT_TYPES = {
    "pdf": "application/pdf",
    "txt": "text/plain",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
_EXTENSIONS_BY_CONTENT_TYPE = {content_type: extension for extension, content_type in CONTENT_TYPES.items()}


class UnsupportedUploadError(ValueError):
    pass


def _extension(filename: str, content_type: str | None = None) -> str:
    if "." in filename:
        return filename.rsplit(".", 1)[-1].lower()
    # No extension: trust the declared media type.
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return _EXTENSIONS_BY_CONTENT_TYPE.get(media_type, "")


def validate_upload_signature(*, extension: str, content: bytes) -> None:
    if extension == "pdf" and not content.startswith(PDF_MAGIC):
        raise UnsupportedUploadError("File content does not look like a PDF.")
    if extension == "docx" and not content.startswith(ZIP_MAGICS):
        raise UnsupportedUploadError("File content does not look like a DOCX document.")


def _parse_txt(content: bytes) -> tuple[str, list[str]]:
    # UTF-16 only with a BOM; it would "decode" almost any even-length bytes.
    encodings = ("utf-16",) if content.startswith(UTF16_BOMS) else ("utf-8-sig", "latin-1")
    for encoding in encodings:
        try:
            return content.decode(encoding), []
        except UnicodeDecodeError:
            continue
    return "", ["Unable to decode text file."]


def _parse_pdf(content: bytes) -> tuple[str, list[str]]:
    from pypdf import PdfReader

    warnings: list[str] = []
    try:
        reader = PdfReader(BytesIO(content))
        text_parts: list[str] = []
        for page in reader.pages:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
        if not text_parts:
            warnings.append("No extractable text found in PDF.")
        return "\n".join(text_parts), warnings
    except Exception as exc:
        raise UnsupportedUploadError("Unable to extract text from this PDF file.") from exc


def _parse_docx(content: bytes) -> tuple[str, list[str]]:
    from docx import Document

    warnings: list[str] = []
    try:
        document = Document(BytesIO(content))
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
        if not paragraphs:
            warnings.append("No extractable text found in DOCX.")
        return "\n".join(paragraphs), warnings
    except Exception as exc:
        raise UnsupportedUploadError("Unable to extract text from this DOCX file.") from exc


_PARSERS = {
    "txt": _parse_txt,
    "pdf": _parse_pdf,
    "docx": _parse_docx,
}


def decode_upload(filename: str, content: bytes, content_type: str | None = None) -> ParsedDoc:
    """Decode an uploaded resume into text. Nothing is written to disk.

    The type comes from the filename extension, or from ``content_type``
    when the filename has none.
    """
    extension = _extension(filename, content_type)
    parser = _PARSERS.get(extension)
    if parser is None:
        raise UnsupportedUploadError(
            f"Unsupported file type '.{extension}'. Supported types: {', '.join(sorted(_PARSERS))}."
        )
    validate_upload_signature(extension=extension, content=content)

    text, warnings = parser(content)
    for warning in warnings:
        logger.info("upload_parsing_warning file=%s: %s", filename, warning)

    return ParsedDoc(
        filename=filename,
        source_type=extension,
        content_type=CONTENT_TYPES[extension],
        size_bytes=len(content),
        text=text,
        parsing_warnings=warnings,
    )
