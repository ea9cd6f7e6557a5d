"""Intake pipeline: validate → extract → format for display."""
from __future__ import annotations

import time

import structlog
from pydantic import BaseModel

from .config import Settings
from .extraction.extractor import API_KEY_MESSAGE, BankingDataExtractor
from .intake.file_validation import format_file_size, validate_file
from .international.display import DisplayStatement, format_statement_for_display
from .llm.base import LLMClient
from .llm.openai_client import OpenAIClient
from .models.banking import BankingData
from .models.upload import UploadedFile

logger = structlog.get_logger(__name__)


class IntakeResult(BaseModel):
    """Outcome of processing one uploaded statement."""

    success: bool
    error: str | None = None
    rejected: bool = False  # failed the upload policy, nothing was extracted
    filename: str | None = None
    file_size: int | None = None
    data: BankingData | None = None
    display: DisplayStatement | None = None


def build_llm_client(settings: Settings) -> LLMClient:
    return OpenAIClient(
        api_key=settings.openai_api_key.get_secret_value(),
        model=settings.extraction_model,
        azure_endpoint=settings.azure_openai_endpoint,
        api_version=settings.azure_openai_api_version,
        timeout=settings.llm_timeout,
    )


class IntakePipeline:
    """Orchestrates validation, extraction and display formatting of one upload."""

    def __init__(self, settings: Settings, client: LLMClient | None = None):
        self.settings = settings
        self._client = client
        self._extractor: BankingDataExtractor | None = None

    @property
    def extractor(self) -> BankingDataExtractor:
        # Built lazily so validation-only use never needs model credentials
        if self._extractor is None:
            self._extractor = BankingDataExtractor(
                self._client or build_llm_client(self.settings),
                dpi=self.settings.dpi,
                max_pages=self.settings.max_pages,
                use_vision=self.settings.use_vision,
                temperature=self.settings.llm_temperature,
                max_tokens=self.settings.llm_max_tokens,
            )
        return self._extractor

    async def process(self, upload: UploadedFile, file_bytes: bytes, locale: str | None = None) -> IntakeResult:
        """Run the full intake flow for one uploaded file."""
        locale = locale or self.settings.default_locale.value
        start = time.monotonic()
        logger.info(
            "intake_start",
            filename=upload.filename,
            size=format_file_size(upload.size_bytes),
            locale=locale,
        )

        validation = validate_file(upload)
        if not validation.success:
            logger.info("intake_rejected", filename=upload.filename, reason=validation.error)
            return IntakeResult(
                success=False,
                rejected=True,
                error=validation.error,
                filename=upload.filename,
            )

        try:
            extractor = self.extractor
        except ValueError as exc:
            logger.error("intake_llm_not_configured", error=str(exc))
            return IntakeResult(
                success=False,
                error=API_KEY_MESSAGE,
                filename=upload.filename,
            )

        outcome = await extractor.extract(file_bytes, upload.filename or "statement.pdf", upload.mime_type)
        if not outcome.success or outcome.data is None:
            return IntakeResult(
                success=False,
                error=outcome.error,
                filename=upload.filename,
                file_size=upload.size_bytes,
            )

        display = format_statement_for_display(outcome.data, locale)
        logger.info(
            "intake_complete",
            filename=upload.filename,
            transaction_count=display.transaction_count,
            locale=display.locale,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return IntakeResult(
            success=True,
            filename=upload.filename,
            file_size=upload.size_bytes,
            data=outcome.data,
            display=display,
        )
