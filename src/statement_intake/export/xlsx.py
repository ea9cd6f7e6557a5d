"""XLSX export of statement transactions using openpyxl."""

from __future__ import annotations

import io

import structlog
from openpyxl import Workbook
from openpyxl.styles import Border, Font, PatternFill, Side
from pydantic import BaseModel, Field

from ..international.locale_formatting import parse_standardized_amount
from ..models.banking import BankingData
from ..models.locale import DEFAULT_LOCALE, SupportedLocale

logger = structlog.get_logger(__name__)

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class TransactionForExport(BaseModel):
    date: str
    description: str
    amount: float
    currency: str | None = None
    type: str | None = None


class ColumnHeaders(BaseModel):
    """Header labels; callers pass translated labels for the user's locale."""

    date: str = "Date"
    description: str = "Description"
    amount: str = "Amount"
    currency: str = "Currency"
    type: str = "Type"


_LOCALIZED_HEADERS = {
    SupportedLocale.EN: ColumnHeaders(),
    SupportedLocale.PT: ColumnHeaders(
        date="Data",
        description="Descrição",
        amount="Valor",
        currency="Moeda",
        type="Tipo",
    ),
}


def column_headers_for(locale: str | None) -> ColumnHeaders:
    """Header labels for *locale*; unknown locales get the English labels."""
    try:
        return _LOCALIZED_HEADERS[SupportedLocale(locale)]
    except ValueError:
        return _LOCALIZED_HEADERS[DEFAULT_LOCALE]


class ExportOptions(BaseModel):
    filename: str = "bank-statement-transactions.xlsx"
    sheet_name: str = "Transactions"
    include_header: bool = True
    column_headers: ColumnHeaders = Field(default_factory=ColumnHeaders)


_COLUMN_WIDTHS = {"A": 12, "B": 40, "C": 15, "D": 10, "E": 10}
_AMOUNT_FORMAT = "#,##0.00"

_HEADER_FONT = Font(bold=True)
_HEADER_FILL = PatternFill(start_color="FFE6F2FF", end_color="FFE6F2FF", fill_type="solid")
_STRIPE_FILL = PatternFill(start_color="FFF8F9FA", end_color="FFF8F9FA", fill_type="solid")
_NEGATIVE_FONT = Font(color="FFDC3545")
_POSITIVE_FONT = Font(color="FF28A745")
_THIN_SIDE = Side(style="thin", color="FFD1D3D4")
_CELL_BORDER = Border(left=_THIN_SIDE, right=_THIN_SIDE, top=_THIN_SIDE, bottom=_THIN_SIDE)


def transactions_from_banking_data(data: BankingData) -> list[TransactionForExport]:
    """Convert extracted transactions to export rows.

    Debits are written as negative amounts. Transactions whose amount cannot
    be parsed are skipped and logged.
    """
    rows: list[TransactionForExport] = []
    for tx in data.transactions:
        value = parse_standardized_amount(tx.amount)
        if value is None:
            logger.warning("xlsx_export_unparsable_amount", amount=tx.amount, date=tx.date)
            continue
        amount = float(value)
        if tx.type == "debit" and amount > 0:
            amount = -amount
        rows.append(TransactionForExport(
            date=tx.date,
            description=tx.description,
            amount=amount,
            currency=data.currency,
            type=tx.type,
        ))
    return rows


def export_transactions_to_xlsx(
    transactions: list[TransactionForExport],
    options: ExportOptions | None = None,
) -> bytes:
    """Build an XLSX workbook of *transactions* and return its bytes."""
    options = options or ExportOptions()

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = options.sheet_name

    for column, width in _COLUMN_WIDTHS.items():
        worksheet.column_dimensions[column].width = width

    if options.include_header:
        headers = options.column_headers
        worksheet.append([headers.date, headers.description, headers.amount, headers.currency, headers.type])
        for cell in worksheet[1]:
            cell.font = _HEADER_FONT
            cell.fill = _HEADER_FILL

    first_data_row = 2 if options.include_header else 1
    for index, tx in enumerate(transactions):
        row_number = first_data_row + index
        worksheet.cell(row=row_number, column=1, value=tx.date)
        worksheet.cell(row=row_number, column=2, value=tx.description)
        amount_cell = worksheet.cell(row=row_number, column=3, value=tx.amount)
        worksheet.cell(row=row_number, column=4, value=tx.currency or "")
        worksheet.cell(row=row_number, column=5, value=tx.type or "")

        amount_cell.number_format = _AMOUNT_FORMAT
        if tx.amount < 0:
            amount_cell.font = _NEGATIVE_FONT
        elif tx.amount > 0:
            amount_cell.font = _POSITIVE_FONT

        if index % 2 == 1:
            for column in range(1, 6):
                worksheet.cell(row=row_number, column=column).fill = _STRIPE_FILL

    last_row = first_data_row + len(transactions) - 1
    for row in worksheet.iter_rows(min_row=1, max_row=max(last_row, 1), min_col=1, max_col=5):
        for cell in row:
            cell.border = _CELL_BORDER

    buffer = io.BytesIO()
    workbook.save(buffer)
    logger.info(
        "xlsx_export_complete",
        filename=options.filename,
        row_count=len(transactions),
        size_bytes=buffer.tell(),
    )
    return buffer.getvalue()
