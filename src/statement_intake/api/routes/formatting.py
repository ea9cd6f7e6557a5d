"""Locale formatting routes."""
from __future__ import annotations
from fastapi import APIRouter
from pydantic import BaseModel

from ...international.locale_formatting import format_amount_with_sign, format_date, format_number, rules_for
from ...models.locale import LocaleFormatRules

router = APIRouter()


class FormatPreviewRequest(BaseModel):
    locale: str
    date: str | None = None
    amount: str | None = None


class FormatPreviewResponse(BaseModel):
    locale: str
    date: str | None = None
    number: str | None = None
    signed_amount: str | None = None


@router.get("/rules/{locale}", response_model=LocaleFormatRules)
async def get_rules(locale: str):
    """Date and number rules for *locale* (default rules for unknown codes)."""
    return rules_for(locale)


@router.post("/preview", response_model=FormatPreviewResponse)
async def preview(payload: FormatPreviewRequest):
    """Format a standardized date and amount the way the statement viewer shows them."""
    return FormatPreviewResponse(
        locale=payload.locale,
        date=format_date(payload.date, payload.locale) if payload.date is not None else None,
        number=format_number(payload.amount, payload.locale) if payload.amount is not None else None,
        signed_amount=(
            format_amount_with_sign(payload.amount, payload.locale) if payload.amount is not None else None
        ),
    )
