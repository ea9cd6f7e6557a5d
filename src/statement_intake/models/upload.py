"""Upload metadata and validation result types."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """Declared metadata of an uploaded file. Only inspected, never stored."""

    filename: str | None = None
    mime_type: str
    size_bytes: int = Field(ge=0)


class ValidationOutcome(BaseModel):
    success: bool
    error: str | None = None
