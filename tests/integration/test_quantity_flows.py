#!/usr/bin/env python3
"""
Integration tests combining quantities, currencies, ratios and JSON.

Each test follows a realistic sequence of operations across modules.
"""

import pytest

from ledgernum.core.json_utils import format_json, quantity_from_json, read_json, write_json
from ledgernum.core.quantities import Quantity, get_decimal_definition, get_quantity_definition
from ledgernum.core.ratios import Ratio


@pytest.mark.integration
class TestSplitTransactions:
    """Test splitting amounts the way a ledger splits transactions."""

    def test_split_test_cases(self, def2, split_test_cases):
        """Test known splits always sum to the amount."""
        for case in split_test_cases:
            amount = def2.quantity_from_number(case["amount"])
            parts = amount.subdivide(case["weights"])

            assert [part.base_value for part in parts] == case["parts"]
            assert Quantity.add_quantities(parts) == amount

    def test_split_receipt_with_tax(self, usd):
        """Test a receipt subtotal and tax split across items by price."""
        items = [usd.base_value_from_string(text) for text in ["$12.99", "$4.50", "$0.99"]]
        subtotal = Quantity.add_quantities([usd.from_base_value(item) for item in items])
        assert subtotal.to_value_text() == "$18.48"

        tax = usd.from_base_value(152)
        tax_parts = tax.subdivide(items)
        assert sum(part.base_value for part in tax_parts) == 152
        assert [part.base_value for part in tax_parts] == [107, 37, 8]

        totals = [usd.from_base_value(item).add(part) for item, part in zip(items, tax_parts)]
        assert Quantity.add_quantities(totals) == subtotal + tax


@pytest.mark.integration
@pytest.mark.ratio
class TestRatioScaling:
    """Test applying chained ratios to quantities."""

    def test_share_price_conversion(self, usd):
        """Test scaling a price by a chain of ratios keeps exactness."""
        price = usd.decimal_value_to_string(100)
        quantity = usd.from_value_text(price).quantity

        scale = Ratio(1_000_000_000, 3).multiply(Ratio(3, 10)).multiply(Ratio(1, 100_000_000))
        assert scale.get_reduced_numerator_denominator() == (1, 1)
        assert scale.apply_to_quantity(quantity) == quantity

    def test_round_trip_through_inverse(self, def3):
        """Test a ratio and its inverse cancel exactly."""
        quantity = def3.quantity_from_number(7.125)
        ratio = Ratio([7, 11, 13], [2, 3, 5])
        scaled = ratio.multiply(ratio.inverse())
        assert scaled.reduce() == Ratio(1, 1)
        assert scaled.apply_to_quantity(quantity) == quantity


@pytest.mark.integration
class TestPersistence:
    """Test quantities survive being saved and restored."""

    def test_ledger_round_trip(self, tmp_path, usd, def2):
        """Test mixed quantities written to disk come back identical."""
        shares = get_decimal_definition({"decimalPlaces": 4, "groupMark": ","}).quantity_from_number(1234.5678)
        entries = {
            "cash": usd.from_base_value(-2500),
            "shares": shares,
            "fee": def2.from_base_value(99),
        }

        filepath = tmp_path / "ledger.json"
        write_json(filepath, entries)
        data = read_json(filepath)

        restored = {key: quantity_from_json(value) for key, value in data.items()}
        assert restored == entries
        assert restored["shares"].to_value_text() == "1,234.5678"

    def test_definition_names_resolve(self, usd):
        """Test definition names are enough to find shared definitions again."""
        names = [usd.definition_name, get_decimal_definition(-2).definition_name]
        assert [get_quantity_definition(name).definition_name for name in names] == names
        assert get_decimal_definition(-2).from_base_value(12345).to_value_text() == "1234500"
        assert "baseValue" in format_json(usd.from_base_value(1))
