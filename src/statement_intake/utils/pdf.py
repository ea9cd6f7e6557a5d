"""PDF reading utilities using PyMuPDF and pdfplumber.

Library failures are logged and re-raised as ``PdfProcessingError`` with a
fixed message; the original exception is chained.
"""

from __future__ import annotations

import io

import fitz  # PyMuPDF
import pdfplumber
import structlog
from pydantic import BaseModel

from ..errors import PdfProcessingError

logger = structlog.get_logger(__name__)


class PdfMetadata(BaseModel):
    page_count: int
    text: str
    title: str | None = None
    author: str | None = None
    creation_date: str | None = None  # raw PDF date string, e.g. "D:20231201120000Z"


def detect_file_type(file_bytes: bytes) -> str:
    """Detect file type from magic bytes.

    Returns one of ``"pdf"``, ``"png"``, ``"jpeg"``, ``"tiff"``, or ``"unknown"``.
    """
    if file_bytes[:4] == b"%PDF":
        return "pdf"
    if file_bytes[:8] == b"\x89PNG\r\n\x1a\n":
        return "png"
    if file_bytes[:2] == b"\xff\xd8":
        return "jpeg"
    if file_bytes[:4] in (b"II*\x00", b"MM\x00*"):
        return "tiff"
    return "unknown"


def count_pdf_pages(file_bytes: bytes) -> int:
    """Return the number of pages in a PDF."""
    logger.info("pdf_count_pages_start", file_size=len(file_bytes))
    try:
        with fitz.open(stream=file_bytes, filetype="pdf") as doc:
            page_count = len(doc)
    except Exception as exc:
        logger.error("pdf_count_pages_failed", file_size=len(file_bytes), error=str(exc))
        raise PdfProcessingError("Failed to count PDF pages") from exc

    logger.info("pdf_count_pages_done", page_count=page_count, file_size=len(file_bytes))
    return page_count


def _page_texts(file_bytes: bytes) -> list[str]:
    with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


def extract_pdf_text(file_bytes: bytes) -> str:
    """Extract layout-preserving text from every page, joined by newlines."""
    logger.info("pdf_extract_text_start", file_size=len(file_bytes))
    try:
        texts = _page_texts(file_bytes)
    except Exception as exc:
        logger.error("pdf_extract_text_failed", file_size=len(file_bytes), error=str(exc))
        raise PdfProcessingError("Failed to extract PDF text") from exc

    text = "\n".join(texts)
    logger.info(
        "pdf_extract_text_done",
        text_length=len(text),
        page_count=len(texts),
        file_size=len(file_bytes),
    )
    return text


def get_pdf_metadata(file_bytes: bytes) -> PdfMetadata:
    """Return page count, text and document info fields of a PDF."""
    logger.info("pdf_metadata_start", file_size=len(file_bytes))
    try:
        with fitz.open(stream=file_bytes, filetype="pdf") as doc:
            page_count = len(doc)
            info = doc.metadata or {}
        text = "\n".join(_page_texts(file_bytes))
    except Exception as exc:
        logger.error("pdf_metadata_failed", file_size=len(file_bytes), error=str(exc))
        raise PdfProcessingError("Failed to get PDF metadata") from exc

    metadata = PdfMetadata(
        page_count=page_count,
        text=text,
        title=info.get("title") or None,
        author=info.get("author") or None,
        creation_date=info.get("creationDate") or None,
    )
    logger.info(
        "pdf_metadata_done",
        page_count=metadata.page_count,
        text_length=len(metadata.text),
        has_title=metadata.title is not None,
        file_size=len(file_bytes),
    )
    return metadata


def render_pdf_to_images(file_bytes: bytes, dpi: int = 150, max_pages: int | None = None) -> list[bytes]:
    """Render PDF pages to PNG image bytes at the given DPI.

    Only the first *max_pages* pages are rendered when a limit is given.
    """
    zoom = dpi / 72
    matrix = fitz.Matrix(zoom, zoom)
    images: list[bytes] = []
    try:
        with fitz.open(stream=file_bytes, filetype="pdf") as doc:
            for index, page in enumerate(doc):
                if max_pages is not None and index >= max_pages:
                    break
                pix = page.get_pixmap(matrix=matrix)
                images.append(pix.tobytes("png"))
    except Exception as exc:
        logger.error("pdf_render_failed", file_size=len(file_bytes), error=str(exc))
        raise PdfProcessingError("Failed to render PDF pages") from exc

    logger.info("pdf_rendered", page_count=len(images), dpi=dpi)
    return images
