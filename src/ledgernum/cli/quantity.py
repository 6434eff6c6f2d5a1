#!/usr/bin/env python3
"""
Quantity CLI - Parsing, Splitting and Ratios

Commands working on plain decimal quantities (and currencies for split).
"""

from decimal import Decimal, InvalidOperation

import click

from ..core.config import get_config
from ..core.currency import UnknownCurrencyError, get_currency
from ..core.json_utils import format_json
from ..core.quantities import QuantityDefinition, QuantityDefinitionError, get_decimal_definition
from ..core.ratios import Ratio


def _decimal_definition(decimal_places: int | None, group_mark: str | None = None, decimal_mark: str | None = None):
    if decimal_places is None:
        decimal_places = get_config().default_decimal_places
    try:
        return get_decimal_definition(
            {"decimalPlaces": decimal_places, "groupMark": group_mark, "decimalMark": decimal_mark}
        )
    except QuantityDefinitionError as e:
        raise click.ClickException(str(e))


def _parse_amount(definition: QuantityDefinition, text: str):
    result = definition.from_value_text(text)
    if result is None or result.remaining_text.strip():
        raise click.ClickException(f"Could not parse amount: {text!r}")
    return result.quantity


def _parse_weight(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise click.BadParameter(f"Not a number: {text!r}", param_hint="WEIGHT")


def _parse_factor(text: str) -> Ratio:
    numerator, _, denominator = text.partition("/")
    try:
        if denominator:
            return Ratio(int(numerator), int(denominator))
        return Ratio(int(numerator))
    except ValueError:
        raise click.BadParameter(f"Expected N or N/D, got {text!r}", param_hint="FACTOR")


@click.command()
@click.argument("text")
@click.option("--decimal-places", "-d", type=int, help="Resolution (default from configuration)")
@click.option("--group-mark", help="Thousands separator, e.g. ','")
@click.option("--decimal-mark", help="Decimal separator (default '.')")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def parse(
    text: str, decimal_places: int | None, group_mark: str | None, decimal_mark: str | None, as_json: bool
) -> None:
    """
    Parse value text into a quantity.

    Examples:
      ledgernum parse 12.345
      ledgernum parse "1,234.5 left over" --group-mark ,
    """
    definition = _decimal_definition(decimal_places, group_mark, decimal_mark)
    result = definition.from_value_text(text)
    if result is None:
        raise click.ClickException(f"No value found in {text!r}")

    if as_json:
        click.echo(
            format_json(
                {
                    "quantity": result.quantity,
                    "fullQuantity": result.full_quantity,
                    "remainingText": result.remaining_text,
                }
            )
        )
        return

    click.echo(f"Quantity: {result.quantity.to_value_text()}")
    click.echo(f"Full quantity: {result.full_quantity.to_value_text()}")
    click.echo(f"Remaining text: {result.remaining_text!r}")


@click.command()
@click.argument("amount")
@click.argument("weights", nargs=-1, required=True)
@click.option("--decimal-places", "-d", type=int, help="Resolution (default from configuration)")
@click.option("--currency", "currency_code", help="Split a currency amount, e.g. USD")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def split(
    amount: str, weights: tuple[str, ...], decimal_places: int | None, currency_code: str | None, as_json: bool
) -> None:
    """
    Split an amount into parts proportional to weights.

    The parts always add up exactly to the amount.

    Examples:
      ledgernum split 100 1 1 1
      ledgernum split '$10.00' 2 1 1 --currency USD
    """
    if currency_code and decimal_places is not None:
        raise click.UsageError("Use either --decimal-places or --currency, not both")

    if currency_code:
        try:
            definition: QuantityDefinition = get_currency(currency_code)
        except UnknownCurrencyError:
            raise click.ClickException(f"Unknown currency code: {currency_code}")
    else:
        definition = _decimal_definition(decimal_places)

    quantity = _parse_amount(definition, amount)
    try:
        parts = quantity.subdivide([_parse_weight(weight) for weight in weights])
    except ValueError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(format_json({"amount": quantity, "parts": parts}))
        return

    for weight, part in zip(weights, parts):
        click.echo(f"{weight:>8}  {part.to_value_text()}")
    click.echo(f"{'Total':>8}  {quantity.add_quantities(parts).to_value_text()}")


@click.command()
@click.argument("factors", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def ratio(factors: tuple[str, ...], as_json: bool) -> None:
    """
    Multiply ratio factors exactly and reduce the result.

    Each FACTOR is N or N/D.

    Example:
      ledgernum ratio 1000000000/3 3/10
    """
    result = Ratio([_parse_factor(factor) for factor in factors])
    numerator, denominator = result.get_reduced_numerator_denominator()

    if as_json:
        data = result.to_json()
        data["reduced"] = [numerator, denominator]
        click.echo(format_json(data))
        return

    click.echo(f"Numerators: {result.get_numerators()}")
    click.echo(f"Denominators: {result.get_denominators()}")
    click.echo(f"Reduced: {numerator}/{denominator}")
    click.echo(f"Value: {result.to_value()}")
