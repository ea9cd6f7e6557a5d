"""Test banking data, locale and upload models."""
import pytest
from pydantic import ValidationError

from statement_intake.models.banking import BankingData, Transaction
from statement_intake.models.locale import DEFAULT_LOCALE, LocaleFormatRules, SupportedLocale
from statement_intake.models.upload import UploadedFile
from tests.factories import make_banking_payload


class TestBankingData:
    def test_from_camel_case_payload(self):
        data = BankingData.model_validate(make_banking_payload())
        assert data.bank_name == "Banco Exemplo"
        assert data.format_detection.original_date_format == "dd/mm/yyyy"
        assert data.format_detection.original_number_format.thousand_separator == "."
        assert data.statement_period.from_date == "2025-12-01"
        assert len(data.transactions) == 3

    def test_accepts_python_names(self):
        tx = Transaction(date="2025-01-02", description="x", amount="1.00", type="credit", original_date="02/01/2025")
        assert tx.original_date == "02/01/2025"

    def test_all_fields_optional(self):
        data = BankingData.model_validate({})
        assert data.transactions == []
        assert data.format_detection is None

    def test_rejects_unknown_transaction_type(self):
        payload = make_banking_payload(transactions=[
            {"date": "2025-12-05", "description": "x", "amount": "1.00", "type": "transfer"},
        ])
        with pytest.raises(ValidationError):
            BankingData.model_validate(payload)

    def test_dump_by_alias(self):
        dumped = BankingData.model_validate(make_banking_payload()).model_dump(by_alias=True)
        assert dumped["statementPeriod"] == {"from": "2025-12-01", "to": "2025-12-31"}


class TestLocaleModels:
    def test_default_locale(self):
        assert DEFAULT_LOCALE is SupportedLocale.EN

    def test_rules_reject_equal_separators(self):
        with pytest.raises(ValidationError):
            LocaleFormatRules(date_format="dd/mm/yyyy", decimal_separator=",", thousand_separator=",")

    def test_rules_are_frozen(self):
        rules = LocaleFormatRules(date_format="dd/mm/yyyy", decimal_separator=",", thousand_separator=".")
        with pytest.raises(ValidationError):
            rules.decimal_separator = "."


class TestUploadedFile:
    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            UploadedFile(mime_type="application/pdf", size_bytes=-1)
