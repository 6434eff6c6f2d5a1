#!/usr/bin/env python3
"""
JSON Utilities Module

Serialization of quantity definitions, quantities, currencies and ratios, plus
file and string helpers with consistent pretty-printing.

Serialized forms:
- DecimalDefinition: {"decimalPlaces": 2, "groupMark": ","}
- Currency: "USD", or the full options for non-standard currencies
- Quantity: {"definition": <definition>, "baseValue": 1234}
- Ratio: {"numerators": [...], "denominators": [...]}
"""

import json
from pathlib import Path
from typing import Any

from .currency import Currency, currency_from_json, currency_to_json
from .quantities import Quantity, QuantityDefinition, get_decimal_definition
from .ratios import Ratio


def definition_to_json(definition: QuantityDefinition | None) -> Any:
    """Serialize a quantity definition."""
    if definition is None:
        return None
    return definition.to_json()


def definition_from_json(json_value: Any) -> QuantityDefinition | None:
    """
    Restore the shared definition for a serialized definition.

    Strings and mappings with a 'code' key are currencies, everything else is
    a decimal definition.
    """
    if json_value is None:
        return None
    if isinstance(json_value, QuantityDefinition):
        return json_value
    if isinstance(json_value, str) and not json_value.startswith("DecimalDefinition_"):
        return currency_from_json(json_value)
    if isinstance(json_value, dict) and ("code" in json_value or "currency" in json_value):
        return currency_from_json(json_value)
    return get_decimal_definition(json_value)


def quantity_to_json(quantity: Quantity | None) -> dict[str, Any] | None:
    """Serialize a quantity."""
    if quantity is None:
        return None
    return {
        "definition": definition_to_json(quantity.definition),
        "baseValue": quantity.base_value,
    }


def quantity_from_json(json_value: dict[str, Any] | None) -> Quantity | None:
    """Restore a quantity serialized by quantity_to_json()."""
    if json_value is None:
        return None
    definition = definition_from_json(json_value["definition"])
    return definition.from_base_value(json_value["baseValue"])


def to_json_value(value: Any) -> Any:
    """
    Default hook for json.dumps() handling ledgernum types.

    Raises:
        TypeError: For types that are not ledgernum values
    """
    if isinstance(value, Quantity):
        return quantity_to_json(value)
    if isinstance(value, Currency):
        return currency_to_json(value)
    if isinstance(value, QuantityDefinition):
        return definition_to_json(value)
    if isinstance(value, Ratio):
        return value.to_json()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_json(filepath: str | Path, data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    Quantities, definitions and ratios are serialized with to_json_value().

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys, default=to_json_value)


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        The parsed JSON data
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def format_json(data: Any, ensure_ascii: bool = False, sort_keys: bool = False, default: Any = to_json_value) -> str:
    """
    Format data as a pretty-printed JSON string.

    Args:
        data: Data to format
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)
        default: Function to serialize non-JSON types (default: to_json_value)

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(data, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys, default=default)
