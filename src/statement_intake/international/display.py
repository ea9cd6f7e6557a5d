"""Shape extracted banking data for display under a locale."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..models.banking import BankingData
from ..models.locale import DEFAULT_LOCALE, SupportedLocale
from .locale_formatting import format_amount_with_sign, format_date, format_number


class DisplayTransaction(BaseModel):
    date: str
    description: str
    amount: str
    type: str


class DisplayPeriod(BaseModel):
    from_date: str
    to_date: str


class DisplayStatement(BaseModel):
    """Locale-formatted view of a ``BankingData`` record."""

    locale: str
    bank_name: str | None = None
    account_holder_name: str | None = None
    account_number: str | None = None
    routing_number: str | None = None
    currency: str | None = None
    balance: str | None = None
    statement_period: DisplayPeriod | None = None
    transactions: list[DisplayTransaction] = Field(default_factory=list)
    transaction_count: int = 0


def _resolve_locale(locale: str | None) -> str:
    try:
        return SupportedLocale(locale).value
    except ValueError:
        return DEFAULT_LOCALE.value


def format_statement_for_display(data: BankingData, locale: str | None) -> DisplayStatement:
    """Pass every date and amount of *data* through the locale formatter.

    Identity fields, descriptions and transaction types are copied verbatim.
    """
    transactions = [
        DisplayTransaction(
            date=format_date(tx.date, locale),
            description=tx.description,
            amount=format_amount_with_sign(tx.amount, locale),
            type=tx.type,
        )
        for tx in data.transactions
    ]

    period = None
    if data.statement_period is not None:
        period = DisplayPeriod(
            from_date=format_date(data.statement_period.from_date, locale),
            to_date=format_date(data.statement_period.to_date, locale),
        )

    return DisplayStatement(
        locale=_resolve_locale(locale),
        bank_name=data.bank_name,
        account_holder_name=data.account_holder_name,
        account_number=data.account_number,
        routing_number=data.routing_number,
        currency=data.currency,
        balance=format_number(data.balance, locale) if data.balance is not None else None,
        statement_period=period,
        transactions=transactions,
        transaction_count=len(transactions),
    )
