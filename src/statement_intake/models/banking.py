"""Structured banking data returned by the extraction model.

All dates are ISO ``YYYY-MM-DD`` strings and all amounts are standardized
strings using ``.`` as the decimal point with no grouping (optionally prefixed
by a 3-letter currency code). Conversion to display formats happens later in
``international.display``.

The model answers in camelCase JSON; every field accepts either its alias or
its Python name.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NumberFormatDetection(_CamelModel):
    """Separators seen in the source document."""

    decimal_separator: Literal[",", "."] = Field(alias="decimalSeparator")
    thousand_separator: Literal[",", ".", " ", "none"] = Field(alias="thousandSeparator")


class FormatDetection(_CamelModel):
    """Locale signals the model detected in the source document."""

    detected_locale: str = Field(alias="detectedLocale")
    original_date_format: Literal["dd/mm/yyyy", "mm/dd/yyyy", "yyyy-mm-dd", "other"] = Field(
        alias="originalDateFormat"
    )
    original_number_format: NumberFormatDetection = Field(alias="originalNumberFormat")
    conversion_notes: str | None = Field(default=None, alias="conversionNotes")


class Transaction(_CamelModel):
    date: str
    description: str
    amount: str
    type: Literal["debit", "credit"]
    original_date: str | None = Field(default=None, alias="originalDate")
    original_amount: str | None = Field(default=None, alias="originalAmount")


class StatementPeriod(_CamelModel):
    from_date: str = Field(alias="from")
    to_date: str = Field(alias="to")


class BankingData(_CamelModel):
    format_detection: FormatDetection | None = Field(default=None, alias="formatDetection")
    account_number: str | None = Field(default=None, alias="accountNumber")
    routing_number: str | None = Field(default=None, alias="routingNumber")
    account_holder_name: str | None = Field(default=None, alias="accountHolderName")
    bank_name: str | None = Field(default=None, alias="bankName")
    balance: str | None = None
    transactions: list[Transaction] = Field(default_factory=list)
    statement_period: StatementPeriod | None = Field(default=None, alias="statementPeriod")
    currency: str | None = None


class ExtractionOutcome(BaseModel):
    """Result of a single extraction attempt. ``error`` is set only on failure."""

    success: bool
    data: BankingData | None = None
    error: str | None = None
