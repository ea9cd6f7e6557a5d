"""Test locale-aware display formatting."""
import pytest
from decimal import Decimal

from statement_intake.international.locale_formatting import (
    LOCALE_FORMAT_RULES,
    format_amount_with_sign,
    format_date,
    format_number,
    parse_standardized_amount,
    rules_for,
)
from statement_intake.models.locale import SupportedLocale


class TestRulesFor:
    def test_english(self):
        rules = rules_for("en")
        assert rules.date_format == "mm/dd/yyyy"
        assert rules.decimal_separator == "."
        assert rules.thousand_separator == ","

    def test_portuguese(self):
        rules = rules_for("pt")
        assert rules.date_format == "dd/mm/yyyy"
        assert rules.decimal_separator == ","
        assert rules.thousand_separator == "."

    def test_enum_member(self):
        assert rules_for(SupportedLocale.PT) == rules_for("pt")

    @pytest.mark.parametrize("locale", ["fr", "EN", "", "pt-BR", None])
    def test_unknown_falls_back_to_english(self, locale):
        assert rules_for(locale) == rules_for("en")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            LOCALE_FORMAT_RULES[SupportedLocale.EN] = LOCALE_FORMAT_RULES[SupportedLocale.PT]

    def test_separators_always_differ(self):
        for rules in LOCALE_FORMAT_RULES.values():
            assert rules.decimal_separator != rules.thousand_separator


class TestFormatDate:
    def test_english(self):
        assert format_date("2025-12-05", "en") == "12/05/2025"

    def test_portuguese(self):
        assert format_date("2025-12-05", "pt") == "05/12/2025"

    def test_unknown_locale_uses_english_order(self):
        assert format_date("2025-12-05", "de") == "12/05/2025"

    @pytest.mark.parametrize("value", [
        "05/12/2025",
        "2025-1-5",
        "2025-12-05T10:00:00",
        " 2025-12-05",
        "2025-12-05\n",
        "not a date",
        "",
    ])
    def test_malformed_passthrough(self, value):
        assert format_date(value, "pt") == value

    def test_passthrough_is_idempotent(self):
        once = format_date("12.05.2025", "pt")
        assert format_date(once, "pt") == once == "12.05.2025"


class TestFormatNumber:
    def test_english(self):
        assert format_number("2000.50", "en") == "2,000.50"

    def test_portuguese(self):
        assert format_number("2000.50", "pt") == "2.000,50"

    def test_currency_prefix(self):
        assert format_number("BRL2000.50", "pt") == "2.000,50"
        assert format_number("USD1234567.8", "en") == "1,234,567.80"

    def test_negative(self):
        assert format_number("-100.50", "en") == "-100.50"
        assert format_number("-1234.5", "pt") == "-1.234,50"

    def test_small_values_have_no_separator(self):
        assert format_number("999.99", "en") == "999.99"
        assert format_number("0.5", "pt") == "0,50"

    def test_integer_input(self):
        assert format_number("1000000", "en") == "1,000,000.00"

    def test_half_up_rounding(self):
        assert format_number("1.005", "en") == "1.01"
        assert format_number("2.675", "en") == "2.68"
        assert format_number("-0.125", "en") == "-0.13"

    def test_negative_zero_is_unsigned(self):
        assert format_number("-0.00", "en") == "0.00"

    def test_tiny_negative_keeps_sign(self):
        assert format_number("-0.001", "en") == "-0.00"

    def test_leading_numeric_prefix_is_used(self):
        assert format_number("12.5.3", "en") == "12.50"

    def test_very_large_value(self):
        assert format_number("123456789012345678901234567890.125", "en") == (
            "123,456,789,012,345,678,901,234,567,890.13"
        )

    @pytest.mark.parametrize("value", ["", "abc", "BRL", "-", ".", "N/A"])
    def test_unparsable_passthrough(self, value):
        assert format_number(value, "en") == value

    def test_passthrough_is_idempotent(self):
        once = format_number("n/a", "pt")
        assert format_number(once, "pt") == once == "n/a"

    def test_unknown_locale_uses_english_separators(self):
        assert format_number("2000.50", "xx") == "2,000.50"


class TestFormatAmountWithSign:
    def test_positive(self):
        assert format_amount_with_sign("100.50", "en") == "+100.50"

    def test_negative(self):
        assert format_amount_with_sign("-100.50", "en") == "-100.50"

    def test_zero_has_no_prefix(self):
        assert format_amount_with_sign("0.00", "en") == "0.00"

    def test_portuguese_with_currency(self):
        assert format_amount_with_sign("BRL2000.50", "pt") == "+2.000,50"

    def test_unparsable_has_no_prefix(self):
        assert format_amount_with_sign("pending", "en") == "pending"


class TestParseStandardizedAmount:
    def test_plain(self):
        assert parse_standardized_amount("2000.50") == Decimal("2000.50")

    def test_strips_letters(self):
        assert parse_standardized_amount("BRL-3.5") == Decimal("-3.5")

    def test_none_when_no_digits(self):
        assert parse_standardized_amount("--") is None
