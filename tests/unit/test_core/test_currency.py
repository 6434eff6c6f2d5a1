#!/usr/bin/env python3
"""Tests for currency quantity definitions."""

import pytest

from ledgernum.core.currency import (
    Currency,
    CurrencyOptions,
    CurrencyParseError,
    FormatPart,
    UnknownCurrencyError,
    currency_from_json,
    currency_to_json,
    get_currency,
    get_currency_definition,
)
from ledgernum.core.iso4217 import ISO_4217_CURRENCIES, get_currency_info
from ledgernum.core.quantities import (
    CurrencyMismatchError,
    ParseResult,
    Quantity,
    QuantityDefinitionError,
    get_quantity_definition,
)


@pytest.fixture
def usd_stock(usd):
    """USD copy with four decimal places, as used for share prices."""
    return get_currency_definition({"currency": usd, "name": "USD Stock Price", "decimalPlaces": 4})


class TestCurrencyRegistry:
    """Test currency lookup and singletons."""

    @pytest.mark.currency
    def test_iso_properties(self, usd):
        """Test ISO 4217 properties come from the table."""
        assert usd.code == "USD"
        assert usd.get_code() == "USD"
        assert usd.get_numeric_code() == 840
        assert usd.get_name() == "US Dollar"
        assert usd.get_decimal_places() == 2
        assert usd.is_currency

    @pytest.mark.currency
    def test_same_instance(self, usd):
        """Test lookups share one instance."""
        assert get_currency("USD") is usd
        assert get_currency("usd") is usd
        assert get_currency_definition("USD") is usd
        assert get_currency_definition(usd) is usd
        assert get_currency("EUR") is not usd

    @pytest.mark.currency
    def test_unknown_code(self):
        """Test unknown codes raise UnknownCurrencyError."""
        with pytest.raises(UnknownCurrencyError):
            get_currency("ZZZ")
        with pytest.raises(KeyError):
            get_currency("ZZZ")

    @pytest.mark.currency
    def test_unknown_locale(self):
        """Test unknown locales are rejected."""
        with pytest.raises(QuantityDefinitionError):
            get_currency("USD", "xx_ZZ")

    @pytest.mark.currency
    def test_definition_name_resolves(self, usd, usd_stock):
        """Test currency definition names resolve to the same instance."""
        assert usd.definition_name == "Currency_USD_2@en_US"
        assert get_quantity_definition(usd.definition_name) is usd
        assert get_quantity_definition(usd_stock.definition_name) is usd_stock

    @pytest.mark.currency
    def test_definition_names_distinguish_numeric_codes(self):
        """Test currencies differing only in numeric code keep distinct names."""
        first = get_currency_definition({"code": "XYZ", "numericCode": 1, "decimalPlaces": 2})
        second = get_currency_definition({"code": "XYZ", "numericCode": 2, "decimalPlaces": 2})

        assert first is not second
        assert first.definition_name == "Currency_XYZ_2@en_US:1#XYZ"
        assert second.definition_name == "Currency_XYZ_2@en_US:2#XYZ"
        assert get_quantity_definition(first.definition_name) is first
        assert get_quantity_definition(second.definition_name) is second

    @pytest.mark.currency
    def test_definition_name_with_renumbered_iso_code(self, usd):
        """Test an ISO currency with a changed numeric code resolves by name."""
        renumbered = get_currency_definition({"currency": usd, "numericCode": 999})

        assert renumbered.definition_name == "Currency_USD_2@en_US:999"
        assert get_quantity_definition(renumbered.definition_name) is renumbered
        assert get_quantity_definition(usd.definition_name) is usd

    @pytest.mark.currency
    def test_iso_table(self):
        """Test the ISO table holds the minor units."""
        assert ISO_4217_CURRENCIES["JPY"].decimal_places == 0
        assert ISO_4217_CURRENCIES["BHD"].decimal_places == 3
        assert ISO_4217_CURRENCIES["CLF"].decimal_places == 4
        assert get_currency_info("eur").numeric_code == 978
        assert get_currency_info("ZZZ") is None


class TestCurrencyCopy:
    """Test copy construction."""

    @pytest.mark.currency
    def test_copy_constructor(self, usd, usd_stock):
        """Test a copy keeps the code and overrides name and resolution."""
        assert usd_stock.get_code() == "USD"
        assert usd_stock.get_numeric_code() == usd.get_numeric_code()
        assert usd_stock.get_name() == "USD Stock Price"
        assert usd_stock.get_decimal_places() == 4
        assert usd_stock is not usd

        assert usd_stock.decimal_value_to_string(123) == "$123.0000"

    @pytest.mark.currency
    def test_with_decimal_places(self, usd):
        """Test resolution variants are shared."""
        usd3 = usd.with_decimal_places(3)
        assert usd3.decimal_places == 3
        assert usd3.code == "USD"
        assert usd.with_decimal_places(3) is usd3
        assert usd.with_decimal_places(2) is usd

    @pytest.mark.currency
    def test_custom_currency(self):
        """Test a currency outside the ISO table."""
        points = get_currency_definition({"code": "ABC", "decimalPlaces": 3, "name": "Reward Points"})
        assert points.code == "ABC"
        assert points.decimal_places == 3
        assert points.base_value_from_string(points.base_value_to_string(-1234567)) == -1234567

    @pytest.mark.currency
    def test_options_require_known_code_or_resolution(self):
        """Test options for an unknown code need decimal places."""
        with pytest.raises(UnknownCurrencyError):
            CurrencyOptions.from_value({"code": "ABC"})


class TestCurrencyFormatting:
    """Test localized string formatting."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "value,decimal_places,expected",
        [
            (123.45, None, "$123.45"),
            (-0.12, None, "-$0.12"),
            (1234567.89, None, "$1,234,567.89"),
            (123.45678, 4, "$123.4568"),
            (123.456446, 4, "$123.4564"),
            (100, None, "$100.00"),
            (100, 0, "$100"),
            (100, 3, "$100.000"),
        ],
    )
    def test_decimal_value_to_string(self, usd, value, decimal_places, expected):
        """Test decimal values with optional decimal place override."""
        assert usd.decimal_value_to_string(value, decimal_places) == expected

    @pytest.mark.currency
    def test_base_value_to_string(self, usd):
        """Test base values format at the currency's resolution."""
        assert usd.base_value_to_string(123) == "$1.23"
        assert usd.base_value_to_string(-12) == "-$0.12"
        assert usd.base_value_to_string(123456789) == "$1,234,567.89"
        assert usd.base_value_to_string(0) == "$0.00"

    @pytest.mark.currency
    def test_base_value_to_simple_string(self, usd):
        """Test formatting without symbol or group marks."""
        assert usd.base_value_to_simple_string(123) == "1.23"
        assert usd.base_value_to_simple_string(-12) == "-0.12"
        assert usd.base_value_to_simple_string(123456789) == "1234567.89"

    @pytest.mark.currency
    def test_base_value_to_no_currency_string(self, usd):
        """Test formatting without the symbol."""
        assert usd.base_value_to_no_currency_string(123) == "1.23"
        assert usd.base_value_to_no_currency_string(-12) == "-0.12"
        assert usd.base_value_to_no_currency_string(123456789) == "1,234,567.89"

    @pytest.mark.currency
    def test_format_to_parts(self, usd):
        """Test typed output parts."""
        assert usd.format_to_parts(-123456) == [
            (FormatPart.MINUS_SIGN, "-"),
            (FormatPart.CURRENCY, "$"),
            (FormatPart.INTEGER, "1"),
            (FormatPart.GROUP, ","),
            (FormatPart.INTEGER, "234"),
            (FormatPart.DECIMAL, "."),
            (FormatPart.FRACTION, "56"),
        ]

    @pytest.mark.currency
    def test_parts_to_skip_accepts_strings(self, usd):
        """Test parts may be named by their string values."""
        assert usd.format_base_value_with_parts(123456, "currency") == "1,234.56"
        assert usd.format_base_value_with_parts(123456, ["currency", "group"]) == "1234.56"
        assert usd.format_base_value_with_parts(123456, FormatPart.GROUP) == "$1234.56"

    @pytest.mark.currency
    def test_zero_decimal_currency(self):
        """Test a currency without minor units."""
        jpy = get_currency("JPY", "en_US")
        assert jpy.base_value_to_string(1234) == "¥1,234"
        assert jpy.get_display_text() == "¥x"

    @pytest.mark.currency
    def test_display_text(self, usd, eur):
        """Test display templates."""
        assert usd.get_display_text() == "$x.xx"
        assert eur.get_display_text() == "€x.xx"

    @pytest.mark.currency
    def test_german_locale(self):
        """Test a locale with the symbol after the amount."""
        eur_de = get_currency("EUR", "de_DE")
        text = eur_de.base_value_to_string(-123456)
        assert text.startswith("-1.234,56")
        assert text.endswith("€")
        assert eur_de.base_value_from_string(text) == -123456
        assert eur_de.base_value_from_string("1.234,56\xa0€") == 123456
        assert eur_de.base_value_to_simple_string(123456) == "1234,56"


class TestCurrencyParsing:
    """Test localized string parsing."""

    @pytest.mark.currency
    def test_decimal_value_from_string(self, usd):
        """Test parsing to decimal values."""
        assert usd.decimal_value_from_string("$1.23") == 1.23
        assert usd.decimal_value_from_string("-$12") == -12.00
        assert usd.decimal_value_from_string("+$123.456") == 123.46

    @pytest.mark.currency
    def test_base_value_from_string(self, usd):
        """Test parsing to base values."""
        assert usd.base_value_from_string("$1.23") == 123
        assert usd.base_value_from_string("-$12") == -1200
        assert usd.base_value_from_string("+$123.456") == 12346
        assert usd.base_value_from_string("$1,234.56") == 123456
        assert usd.base_value_from_string(" $12.00 ") == 1200
        assert usd.base_value_from_string("-$0.005") == -1

    @pytest.mark.currency
    def test_round_trip_scenario(self, usd):
        """Test the string and base value forms round-trip."""
        assert usd.base_value_from_string("$1,234.56") == 123456
        assert usd.base_value_to_string(123456) == "$1,234.56"

    @pytest.mark.currency
    @pytest.mark.parametrize("text", ["12a", "$", "", "1.2.3", "€12.00", "12 34", "$ 12.00"])
    def test_parse_errors(self, usd, text):
        """Test invalid currency strings raise CurrencyParseError."""
        with pytest.raises(CurrencyParseError):
            usd.base_value_from_string(text)

    @pytest.mark.currency
    def test_parse_error_is_value_error(self, usd):
        """Test CurrencyParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            usd.base_value_from_string("twelve dollars")

    @pytest.mark.currency
    def test_from_value_text(self, usd):
        """Test value text parsing keeps extra digits in full_quantity."""
        quantity = usd.from_base_value(123)
        assert usd.from_value_text("$1.23") == ParseResult(quantity, quantity, "")

        result = usd.from_value_text("$1.234")
        assert result.quantity == quantity
        assert result.full_quantity == usd.with_decimal_places(3).from_base_value(1234)

        assert usd.from_value_text("abc") is None

    @pytest.mark.currency
    @pytest.mark.parametrize("base_value", [0, 1, -1, 99, -100, 123456789])
    def test_value_text_round_trip(self, usd, base_value):
        """Test from_value_text(to_value_text(q)) gives q back."""
        quantity = usd.from_base_value(base_value)
        assert quantity.to_value_text() == usd.base_value_to_string(base_value)
        assert usd.from_value_text(quantity.to_value_text()).quantity == quantity


class TestCurrencyArithmetic:
    """Test currency compatibility rules."""

    @pytest.mark.currency
    def test_same_currency(self, usd):
        """Test adding and subtracting the same currency."""
        a = usd.from_base_value(1234)
        b = usd.from_base_value(66)
        assert a.add(b) == usd.from_base_value(1300)
        assert a.subtract(b) == usd.from_base_value(1168)
        assert Quantity.add_quantities(a, b).definition is usd

    @pytest.mark.currency
    def test_same_code_different_resolution(self, usd, usd_stock):
        """Test the same currency at a finer resolution promotes."""
        a = usd.from_base_value(1234)
        b = usd_stock.from_base_value(5)
        result = Quantity.add_quantities(a, b)
        assert result.definition is usd_stock
        assert result.base_value == 123405

    @pytest.mark.currency
    def test_different_currencies(self, usd, eur):
        """Test mixing currencies raises."""
        with pytest.raises(CurrencyMismatchError):
            usd.from_base_value(100).add(eur.from_base_value(100))
        with pytest.raises(CurrencyMismatchError):
            Quantity.subtract_quantities(usd.from_base_value(100), eur.from_base_value(100))

    @pytest.mark.currency
    def test_plain_operands_rejected_for_add(self, usd, def2):
        """Test money only adds to money."""
        with pytest.raises(CurrencyMismatchError):
            usd.from_base_value(100).add(1)
        with pytest.raises(CurrencyMismatchError):
            usd.from_base_value(100).add(def2.from_base_value(1))
        with pytest.raises(CurrencyMismatchError):
            def2.from_base_value(1).add(usd.from_base_value(100))

    @pytest.mark.currency
    def test_multiply_by_scalar(self, usd, def3):
        """Test money can be scaled by numbers and plain quantities."""
        price = usd.from_base_value(1999)
        assert price.multiply(3) == usd.from_base_value(5997)
        assert price * def3.quantity_from_number(0.5) == usd.from_base_value(1000)

    @pytest.mark.currency
    def test_multiply_money_by_money(self, usd, eur):
        """Test multiplying two currency quantities raises."""
        with pytest.raises(CurrencyMismatchError):
            usd.from_base_value(100).multiply(usd.from_base_value(100))
        with pytest.raises(CurrencyMismatchError):
            Quantity.multiply_quantities(usd.from_base_value(100), eur.from_base_value(100))

    @pytest.mark.currency
    def test_multiply_other_currency(self, usd, eur):
        """Test a currency cannot multiply another currency's quantity."""
        with pytest.raises(CurrencyMismatchError):
            usd.multiply_quantities([eur.from_base_value(100), 2])

    @pytest.mark.currency
    def test_ordering(self, usd, usd_stock, eur, def2):
        """Test money only orders against the same currency."""
        assert usd.from_base_value(100) < usd_stock.from_base_value(10001)
        assert usd.from_base_value(100) >= usd.from_base_value(100)

        with pytest.raises(CurrencyMismatchError):
            usd.from_base_value(100) < eur.from_base_value(200)
        with pytest.raises(CurrencyMismatchError):
            usd.from_base_value(100) > def2.from_base_value(1)
        with pytest.raises(CurrencyMismatchError):
            def2.from_base_value(1) <= usd.from_base_value(100)

    @pytest.mark.currency
    def test_subdivide(self, usd):
        """Test splitting money keeps the currency and the total."""
        parts = usd.from_base_value(1000).subdivide([1, 1, 1])
        assert [part.base_value for part in parts] == [333, 333, 334]
        assert all(part.definition is usd for part in parts)


class TestCurrencyJson:
    """Test currency serialization."""

    @pytest.mark.currency
    def test_standard_currency_is_code(self, usd):
        """Test registry currencies serialize to their code."""
        assert currency_to_json(usd) == "USD"
        assert currency_from_json("USD") is usd

    @pytest.mark.currency
    def test_custom_currency_is_options(self, usd_stock):
        """Test non-standard currencies serialize to full options."""
        json_value = currency_to_json(usd_stock)
        assert json_value == {
            "code": "USD",
            "numericCode": 840,
            "name": "USD Stock Price",
            "decimalPlaces": 4,
            "locale": "en_US",
        }
        assert currency_from_json(json_value) is usd_stock

    @pytest.mark.currency
    def test_none(self):
        """Test None passes through."""
        assert currency_to_json(None) is None
        assert currency_from_json(None) is None

    @pytest.mark.currency
    def test_is_currency_instance(self, usd):
        """Test currencies are decimal definitions."""
        assert isinstance(usd, Currency)
