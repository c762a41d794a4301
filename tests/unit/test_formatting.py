"""
Unit tests for formatting module.
"""

import pytest

from xactestate.utils.formatting import (
    NARROW_NBSP,
    NBSP,
    format_area,
    format_compact_value,
    format_number_de,
    format_price,
    parse_amount,
)


class TestFormatPrice:
    """Tests for format_price function."""

    def test_groups_thousands_with_narrow_space(self):
        assert format_price(750000) == f"750{NARROW_NBSP}000{NBSP}€"

    def test_millions(self):
        assert format_price(1250000) == f"1{NARROW_NBSP}250{NARROW_NBSP}000{NBSP}€"

    def test_drops_decimals(self):
        assert format_price(999.6) == f"1{NARROW_NBSP}000{NBSP}€"

    def test_small_value(self):
        assert format_price(950) == f"950{NBSP}€"

    def test_other_currency(self):
        assert format_price(1000, currency="USD") == f"1{NARROW_NBSP}000{NBSP}$"

    def test_none(self):
        assert format_price(None) == "-"


class TestFormatArea:
    """Tests for format_area function."""

    def test_whole_area(self):
        assert format_area(1250) == f"1{NARROW_NBSP}250 m²"

    def test_decimal_uses_comma(self):
        assert format_area(85.5) == "85,5 m²"

    def test_none(self):
        assert format_area(None) == "-"


class TestFormatNumberDe:
    """Tests for format_number_de function."""

    def test_grouping(self):
        assert format_number_de(750000) == "750.000"

    def test_commission_with_decimals(self):
        assert format_number_de(22500.5) == "22.500,5"

    def test_small_number(self):
        assert format_number_de(0) == "0"


class TestFormatCompactValue:
    """Tests for format_compact_value function."""

    def test_billions(self):
        assert format_compact_value(1_250_000_000) == "€1.3B"

    def test_millions(self):
        assert format_compact_value(3_500_000) == "€3.5M"

    def test_exactly_one_million(self):
        assert format_compact_value(1_000_000) == "€1.0M"

    def test_below_a_million(self):
        assert format_compact_value(12345) == "€12,345"

    def test_empty_total(self):
        assert format_compact_value(None) == "€0"


class TestParseAmount:
    """Tests for parse_amount function."""

    def test_plain_number(self):
        assert parse_amount("750000") == 750000

    def test_euro_with_spaces(self):
        assert parse_amount("750 000 €") == 750000

    def test_continental_grouping(self):
        assert parse_amount("1.450.000") == 1450000

    def test_english_grouping(self):
        assert parse_amount("€750,000") == 750000

    def test_continental_decimals(self):
        assert parse_amount("1.234.567,50") == pytest.approx(1234567.5)

    def test_decimal_point(self):
        assert parse_amount("85.5") == pytest.approx(85.5)

    def test_decimal_comma(self):
        assert parse_amount("85,5") == pytest.approx(85.5)

    def test_millions_shorthand(self):
        assert parse_amount("1.5M") == 1500000

    def test_thousands_shorthand(self):
        assert parse_amount("750k") == 750000

    def test_numbers_pass_through(self):
        assert parse_amount(1400) == 1400.0

    def test_text_returns_none(self):
        assert parse_amount("on request") is None

    def test_empty_and_none(self):
        assert parse_amount("") is None
        assert parse_amount(None) is None

    def test_bool_is_not_a_number(self):
        assert parse_amount(True) is None
