"""
Core Numeric Package

Exact fixed-point quantities, currencies, ratios and prime factorization.

This package provides:
- Quantity definitions with a shared, thread-safe registry
- Integer arithmetic with resolution promotion and single rounding
- Currency definitions with Babel-derived locale formatting
- Deferred-reduction ratios
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_default_decimal_places,
    get_locale,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    Currency,
    CurrencyFormat,
    CurrencyOptions,
    CurrencyParseError,
    FormatPart,
    UnknownCurrencyError,
    currency_from_json,
    currency_to_json,
    get_currency,
    get_currency_definition,
)
from .iso4217 import ISO_4217_CURRENCIES, CurrencyInfo, get_currency_info
from .primes import PrimeFactorization, reduce_to_simple_primes
from .quantities import (
    CurrencyMismatchError,
    DecimalDefinition,
    DecimalOptions,
    IncompatibleDefinitionError,
    ParseResult,
    Quantity,
    QuantityDefinition,
    QuantityDefinitionError,
    QuantityError,
    get_decimal_definition,
    get_quantity_definition,
    get_quantity_definition_name,
)
from .ratios import Ratio

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "get_default_decimal_places",
    "get_locale",
    "is_development",
    "is_production",
    "is_test",
    "reload_config",
    # Quantities
    "DecimalDefinition",
    "DecimalOptions",
    "ParseResult",
    "Quantity",
    "QuantityDefinition",
    "get_decimal_definition",
    "get_quantity_definition",
    "get_quantity_definition_name",
    # Errors
    "CurrencyMismatchError",
    "CurrencyParseError",
    "IncompatibleDefinitionError",
    "QuantityDefinitionError",
    "QuantityError",
    "UnknownCurrencyError",
    # Currencies
    "Currency",
    "CurrencyFormat",
    "CurrencyInfo",
    "CurrencyOptions",
    "FormatPart",
    "ISO_4217_CURRENCIES",
    "currency_from_json",
    "currency_to_json",
    "get_currency",
    "get_currency_definition",
    "get_currency_info",
    # Ratios and primes
    "PrimeFactorization",
    "Ratio",
    "reduce_to_simple_primes",
]
