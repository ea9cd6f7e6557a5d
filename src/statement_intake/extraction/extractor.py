"""Banking data extraction from statement PDFs via an LLM.

The model sees the rendered statement pages (and the PDF text layer when
present) and answers with standardized JSON: ISO dates and period-decimal
amounts. Failures never propagate; they are mapped to an
``ExtractionOutcome`` carrying a user-facing message or an ``ErrorCode``.
"""
from __future__ import annotations

import base64

import structlog

from ..errors import ErrorCode, PdfProcessingError
from ..llm.base import LLMClient
from ..llm.response_parser import parse_banking_data
from ..models.banking import ExtractionOutcome
from ..prompts.registry import PromptRegistry
from ..utils.pdf import count_pdf_pages, extract_pdf_text, render_pdf_to_images

logger = structlog.get_logger(__name__)

API_KEY_MESSAGE = "AI service configuration error. Please check your API settings."
QUOTA_MESSAGE = "AI service quota exceeded. Please try again later."
TIMEOUT_MESSAGE = "Processing timeout. The PDF file might be too large or complex."

SYSTEM_TEMPLATE = "banking_extraction"
USER_TEMPLATE = "banking_extraction_user"


def classify_extraction_error(exc: Exception) -> str:
    """Map a model/client failure to the message returned to the caller."""
    message = str(exc).lower()
    if "api key" in message:
        return API_KEY_MESSAGE
    if "quota" in message or "limit" in message:
        return QUOTA_MESSAGE
    if "timeout" in message or "timed out" in message:
        return TIMEOUT_MESSAGE
    return ErrorCode.DATA_EXTRACTION_FAILED.value


class BankingDataExtractor:
    """Runs one statement PDF through the extraction model."""

    def __init__(
        self,
        client: LLMClient,
        prompt_registry: PromptRegistry | None = None,
        *,
        dpi: int = 150,
        max_pages: int = 20,
        use_vision: bool = True,
        temperature: float = 0.0,
        max_tokens: int = 8192,
    ):
        self._client = client
        self._prompts = prompt_registry or PromptRegistry()
        self._dpi = dpi
        self._max_pages = max_pages
        self._use_vision = use_vision
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def extract(self, file_bytes: bytes, filename: str, mime_type: str = "application/pdf") -> ExtractionOutcome:
        logger.info(
            "extraction_start",
            filename=filename,
            file_size=len(file_bytes),
            mime_type=mime_type,
            model=self._client.get_model_name(),
        )

        try:
            page_count = count_pdf_pages(file_bytes)
            text = extract_pdf_text(file_bytes)
            images = (
                render_pdf_to_images(file_bytes, dpi=self._dpi, max_pages=self._max_pages)
                if self._use_vision
                else []
            )
        except PdfProcessingError as exc:
            logger.error("extraction_pdf_unreadable", filename=filename, error=str(exc))
            return ExtractionOutcome(success=False, error=ErrorCode.PDF_PROCESSING_FAILED.value)

        try:
            system_prompt = self._prompts.render(SYSTEM_TEMPLATE)
            user_prompt = self._prompts.render(USER_TEMPLATE, {
                "filename": filename,
                "page_count": page_count,
                "document_text": text.strip() or "(no text layer)",
            })
            if images:
                response = await self._client.complete_vision(
                    system_prompt,
                    user_prompt,
                    [base64.b64encode(img).decode("ascii") for img in images],
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                    json_mode=True,
                )
            else:
                response = await self._client.complete_text(
                    system_prompt,
                    user_prompt,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                    json_mode=True,
                )
            data = parse_banking_data(response.content)
        except Exception as exc:
            error = classify_extraction_error(exc)
            logger.error(
                "extraction_failed",
                filename=filename,
                error=str(exc),
                error_type=type(exc).__name__,
                returned_error=error,
            )
            return ExtractionOutcome(success=False, error=error)

        detection = data.format_detection
        logger.info(
            "extraction_complete",
            filename=filename,
            page_count=page_count,
            pages_sent=len(images),
            has_account_number=data.account_number is not None,
            has_routing_number=data.routing_number is not None,
            has_balance=data.balance is not None,
            transaction_count=len(data.transactions),
            bank_name=data.bank_name,
            detected_locale=detection.detected_locale if detection else None,
            original_date_format=detection.original_date_format if detection else None,
            total_tokens=response.total_tokens,
            latency_ms=response.latency_ms,
        )
        return ExtractionOutcome(success=True, data=data)
