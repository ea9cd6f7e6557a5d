"""Locale-aware display formatting for standardized statement values.

The extraction step emits ISO dates (``2025-12-05``) and period-decimal amount
strings (``2000.50``, ``BRL2000.50``, ``-100.50``). These helpers render them
under a locale's date order and separators.

None of them raise on malformed input: a value that does not have the
expected shape is returned unchanged so the caller can still display it.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from types import MappingProxyType

from ..models.locale import DEFAULT_LOCALE, LocaleFormatRules, SupportedLocale

LOCALE_FORMAT_RULES: MappingProxyType[SupportedLocale, LocaleFormatRules] = MappingProxyType({
    SupportedLocale.EN: LocaleFormatRules(
        date_format="mm/dd/yyyy",
        decimal_separator=".",
        thousand_separator=",",
    ),
    SupportedLocale.PT: LocaleFormatRules(
        date_format="dd/mm/yyyy",
        decimal_separator=",",
        thousand_separator=".",
    ),
})

_ISO_DATE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_CURRENCY_PREFIX = re.compile(r"^[A-Z]{3}")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")
# Longest leading numeric literal, e.g. "12.5" out of "12.5.3" or "-3" out of "-3-4"
_LEADING_NUMBER = re.compile(r"^-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
_CENTS = Decimal("0.01")


def rules_for(locale: str | None) -> LocaleFormatRules:
    """Return the format rules for *locale*; unknown codes get the default rules."""
    try:
        return LOCALE_FORMAT_RULES[SupportedLocale(locale)]
    except ValueError:
        return LOCALE_FORMAT_RULES[DEFAULT_LOCALE]


def format_date(iso_date: str, locale: str | None) -> str:
    """Reorder an ISO ``YYYY-MM-DD`` date for *locale*, e.g. ``12/05/2025`` (en)."""
    match = _ISO_DATE.fullmatch(iso_date)
    if not match:
        return iso_date

    year, month, day = match.groups()
    if rules_for(locale).date_format == "dd/mm/yyyy":
        return f"{day}/{month}/{year}"
    return f"{month}/{day}/{year}"


def parse_standardized_amount(raw: str) -> Decimal | None:
    """Parse the numeric part of a standardized amount, or ``None`` if there is none."""
    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", raw))
    if not match:
        return None
    return Decimal(match.group(0))


def format_number(standardized_amount: str, locale: str | None) -> str:
    """Render a standardized amount with the locale's separators and two decimals.

    ``format_number("BRL2000.50", "pt") == "2.000,50"``
    """
    value = parse_standardized_amount(_CURRENCY_PREFIX.sub("", standardized_amount))
    if value is None:
        return standardized_amount

    rules = rules_for(locale)
    negative = value < 0

    digits = len(value.as_tuple().digits)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, digits + 3)
        rounded = abs(value).quantize(_CENTS, rounding=ROUND_HALF_UP)
        grouped = format(rounded, ",f")

    formatted = grouped.translate(str.maketrans({
        ",": rules.thousand_separator,
        ".": rules.decimal_separator,
    }))
    return f"-{formatted}" if negative else formatted


def format_amount_with_sign(amount: str, locale: str | None) -> str:
    """Like ``format_number`` but prefixes ``+`` for strictly positive amounts."""
    formatted = format_number(amount, locale)
    value = parse_standardized_amount(amount)
    if value is not None and value > 0:
        return f"+{formatted}"
    return formatted
