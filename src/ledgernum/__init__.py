"""
ledgernum - Exact Fixed-Point Quantities for Personal Finance

Every amount is an integer base value tied to a shared definition of its
resolution, so adding, subtracting and splitting money never drifts.

Key Features:
- Fixed-point quantities with any number of decimal places, including negative
- Text parsing and formatting that round-trips exactly
- Proportional splitting whose parts always sum to the total
- Locale-aware currencies for the ISO 4217 table
- Exact ratios reduced by prime factorization

Example Usage:
    from ledgernum import Ratio, get_currency, get_decimal_definition

    cents = get_decimal_definition(2)
    parts = cents.quantity_from_number(1).subdivide([1, 1, 1])

    usd = get_currency("USD")
    usd.base_value_to_string(123456)  # '$1,234.56'
"""

__version__ = "0.1.0"
__author__ = "ledgernum contributors"

from .core.config import Environment, get_config
from .core.currency import Currency, get_currency, get_currency_definition
from .core.quantities import (
    DecimalDefinition,
    Quantity,
    QuantityDefinition,
    get_decimal_definition,
    get_quantity_definition,
)
from .core.ratios import Ratio

__all__ = [
    # Quantities
    "DecimalDefinition",
    "Quantity",
    "QuantityDefinition",
    "get_decimal_definition",
    "get_quantity_definition",
    # Currencies
    "Currency",
    "get_currency",
    "get_currency_definition",
    # Ratios
    "Ratio",
    # Configuration
    "Environment",
    "get_config",
]
