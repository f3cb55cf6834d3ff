"""Plain-text extraction for uploaded CVs and job descriptions.

Dispatches on the declared media type of the upload. Every parser failure is
re-raised as ``ExtractionFailed`` carrying the user-facing filename, so the
HTTP layer can report which document was rejected.
"""
import logging
import os
from typing import Callable, Dict, List, Optional

import pdfplumber
from docx import Document

from domain.errors import ExtractionFailed, UnsupportedFormat

logger = logging.getLogger(__name__)

MEDIA_PDF = "application/pdf"
MEDIA_DOC = "application/msword"
MEDIA_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MEDIA_TEXT = "text/plain"


def base_media_type(media_type: Optional[str]) -> str:
    """``text/plain; charset=utf-8`` -> ``text/plain``."""
    return (media_type or "").split(";", 1)[0].strip().lower()


def parse_pdf_text(path: str) -> str:
    text_parts = []
    with pdfplumber.open(path) as pdf:
        for page in pdf.pages:
            t = page.extract_text() or ""
            text_parts.append(t)
    return "\n".join(text_parts)


OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def parse_word_text(path: str) -> str:
    # only OOXML packages are readable; Word 97-2003 binaries must be resaved as .docx
    with open(path, "rb") as fh:
        if fh.read(len(OLE2_SIGNATURE)) == OLE2_SIGNATURE:
            raise ValueError("legacy binary Word (.doc) files are not supported, save it as .docx")
    doc = Document(path)
    parts: List[str] = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                parts.append("\t".join(cells))
    return "\n\n".join(parts)


def read_plain_text(path: str) -> str:
    with open(path, "rb") as fh:
        return fh.read().decode("utf-8", errors="replace")


_PARSERS: Dict[str, Callable[[str], str]] = {
    MEDIA_PDF: parse_pdf_text,
    MEDIA_DOC: parse_word_text,
    MEDIA_DOCX: parse_word_text,
    MEDIA_TEXT: read_plain_text,
}

SUPPORTED_MEDIA_TYPES = frozenset(_PARSERS)


def extract_text(path: str, media_type: Optional[str], filename: Optional[str] = None) -> str:
    name = filename or os.path.basename(path)
    parser = _PARSERS.get(base_media_type(media_type))
    if parser is None:
        raise UnsupportedFormat(name, media_type)
    try:
        text = parser(path)
    except Exception as exc:
        raise ExtractionFailed(name, str(exc) or type(exc).__name__) from exc
    if not text.strip():
        logger.warning("No text extracted from %s (%s)", name, media_type)
    return text
