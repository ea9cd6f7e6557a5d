"""Locale display conventions for formatted statement output.

``LocaleFormatRules`` describes how a single locale renders dates and numbers.
The table of rules per ``SupportedLocale`` lives in
``international.locale_formatting``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator


class SupportedLocale(StrEnum):
    EN = "en"
    PT = "pt"


DEFAULT_LOCALE = SupportedLocale.EN


class LocaleFormatRules(BaseModel):
    """Date ordering and numeric separators for one locale."""

    model_config = ConfigDict(frozen=True)

    date_format: Literal["dd/mm/yyyy", "mm/dd/yyyy"]
    decimal_separator: Literal[".", ","]
    thousand_separator: Literal[",", "."]

    @model_validator(mode="after")
    def _separators_differ(self) -> LocaleFormatRules:
        if self.decimal_separator == self.thousand_separator:
            raise ValueError("decimal_separator and thousand_separator must differ")
        return self
