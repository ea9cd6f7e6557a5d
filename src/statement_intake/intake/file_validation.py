"""Upload gate for bank statement files.

Only PDF documents are accepted for extraction. Rules are evaluated in order
(non-empty, type, size) and the first failing rule's message is returned.
Validation never raises; callers branch on ``ValidationOutcome.success``.
"""

from __future__ import annotations

from typing import Any

import structlog

from ..models.upload import ValidationOutcome

logger = structlog.get_logger(__name__)

SUPPORTED_FILE_TYPES: dict[str, str] = {
    "PDF": "application/pdf",
}

SUPPORTED_MIME_TYPES: tuple[str, ...] = tuple(SUPPORTED_FILE_TYPES.values())

FILE_SIZE_LIMITS: dict[str, int] = {
    "PDF_FILES": 20 * 1024 * 1024,
}

EMPTY_FILE_MESSAGE = "File cannot be empty"
UNSUPPORTED_TYPE_MESSAGE = "Only PDF files are supported"
SIZE_EXCEEDED_MESSAGE = "PDF file size must be less than 20MB"
NO_FILE_MESSAGE = "No file provided"
GENERIC_FAILURE_MESSAGE = "File validation failed"

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def get_file_size_limit(mime_type: str) -> int:
    """Return the size limit in bytes for *mime_type* (PDF limit for every type)."""
    return FILE_SIZE_LIMITS["PDF_FILES"]


def get_file_category(mime_type: str) -> str:
    if mime_type == SUPPORTED_FILE_TYPES["PDF"]:
        return "PDF Document"
    return "Document"


def validate_file(file: Any) -> ValidationOutcome:
    """Validate an uploaded file's declared metadata.

    *file* is any object exposing ``mime_type`` and ``size_bytes``
    (normally an ``UploadedFile``). Objects without them are rejected with a
    generic message rather than raising.
    """
    try:
        size_bytes = int(file.size_bytes)
        mime_type = file.mime_type
    except (AttributeError, TypeError, ValueError):
        logger.warning("file_validation_malformed_input", input_type=type(file).__name__)
        return ValidationOutcome(success=False, error=GENERIC_FAILURE_MESSAGE)

    if size_bytes <= 0:
        return ValidationOutcome(success=False, error=EMPTY_FILE_MESSAGE)
    if mime_type != SUPPORTED_FILE_TYPES["PDF"]:
        return ValidationOutcome(success=False, error=UNSUPPORTED_TYPE_MESSAGE)
    if size_bytes > get_file_size_limit(mime_type):
        return ValidationOutcome(success=False, error=SIZE_EXCEEDED_MESSAGE)
    return ValidationOutcome(success=True)


def validate_upload(file: Any | None) -> ValidationOutcome:
    """Like ``validate_file`` but also rejects a missing upload."""
    if file is None:
        return ValidationOutcome(success=False, error=NO_FILE_MESSAGE)
    return validate_file(file)


def format_file_size(size_bytes: int) -> str:
    """Render a byte count in the largest base-1024 unit, two decimals.

    ``format_file_size(1536) == "1.50 KB"``; zero is ``"0 Bytes"``.
    """
    if size_bytes < 0:
        raise ValueError(f"Negative file size: {size_bytes}")
    if size_bytes == 0:
        return "0 Bytes"

    value = float(size_bytes)
    unit = 0
    # Compare the rounded value so 1048575 reads "1.00 MB", not "1024.00 KB"
    while round(value, 2) >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.2f} {_SIZE_UNITS[unit]}"
