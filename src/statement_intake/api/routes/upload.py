"""Statement upload routes: validation, extraction and spreadsheet export."""
from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import Response
import structlog

from dotenv import load_dotenv
load_dotenv()

from ...export.xlsx import (
    XLSX_MIME_TYPE,
    ExportOptions,
    column_headers_for,
    export_transactions_to_xlsx,
    transactions_from_banking_data,
)
from ...intake.file_validation import validate_upload
from ...models.upload import UploadedFile, ValidationOutcome
from ...pipeline import IntakePipeline, IntakeResult

router = APIRouter()
logger = structlog.get_logger(__name__)


async def _read_upload(file: UploadFile) -> tuple[UploadedFile, bytes]:
    file_bytes = await file.read()
    upload = UploadedFile(
        filename=file.filename,
        mime_type=file.content_type or "",
        size_bytes=len(file_bytes),
    )
    return upload, file_bytes


async def _run_pipeline(request: Request, file: UploadFile, locale: str | None) -> IntakeResult:
    upload, file_bytes = await _read_upload(file)

    pipeline: IntakePipeline = request.app.state.pipeline
    result = await pipeline.process(upload, file_bytes, locale)
    if result.rejected:
        raise HTTPException(status_code=400, detail=result.error)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error)
    return result


@router.post("/validate", response_model=ValidationOutcome)
async def validate_statement(file: UploadFile | None = File(None)):
    """Check an upload against the type and size policy without processing it."""
    if file is None:
        return validate_upload(None)
    upload, _ = await _read_upload(file)
    return validate_upload(upload)


@router.post("", response_model=IntakeResult)
async def upload_statement(
    request: Request,
    file: UploadFile = File(...),
    locale: str | None = Query(None, description="Display locale, e.g. 'en' or 'pt'"),
):
    """Extract banking data from a PDF statement and format it for *locale*."""
    return await _run_pipeline(request, file, locale)


@router.post("/export")
async def export_statement(
    request: Request,
    file: UploadFile = File(...),
    locale: str | None = Query(None, description="Locale of the column headers"),
):
    """Extract a PDF statement and return its transactions as an XLSX download."""
    result = await _run_pipeline(request, file, locale)
    options = ExportOptions(column_headers=column_headers_for(result.display.locale))
    content = export_transactions_to_xlsx(transactions_from_banking_data(result.data), options)
    logger.info("upload_exported", filename=result.filename, locale=result.display.locale)
    return Response(
        content=content,
        media_type=XLSX_MIME_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{options.filename}"'},
    )
