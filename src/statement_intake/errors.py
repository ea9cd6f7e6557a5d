"""Error types and user-facing error code translation."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

GENERIC_PROCESSING_MESSAGE = (
    "An unexpected error occurred while processing your file. Please try again."
)


class ErrorCode(StrEnum):
    """Codes returned to clients instead of raw server error text."""

    PDF_PROCESSING_FAILED = "ERROR_PDF_PROCESSING_FAILED"
    DATA_EXTRACTION_FAILED = "ERROR_DATA_EXTRACTION_FAILED"


class PdfProcessingError(Exception):
    """A PDF could not be opened or read."""


_ERROR_DICTIONARY_KEYS: dict[str, str] = {
    ErrorCode.PDF_PROCESSING_FAILED: "error_pdf_processing_failed",
    ErrorCode.DATA_EXTRACTION_FAILED: "error_data_extraction_failed",
}


def get_localized_error_message(error_code: str, dictionary: dict[str, Any]) -> str:
    """Translate *error_code* using the ``viewer_page`` section of a UI dictionary.

    Falls back to the dictionary's generic processing message, then to a
    built-in English message.
    """
    viewer_page = dictionary.get("viewer_page") or {}

    key = _ERROR_DICTIONARY_KEYS.get(error_code)
    if key and viewer_page.get(key):
        return viewer_page[key]

    return viewer_page.get("error_generic_processing") or GENERIC_PROCESSING_MESSAGE
