#!/usr/bin/env python3
"""
Currency CLI - Localized Currency Strings

Format and parse amounts of ISO 4217 currencies.
"""

import click

from ..core.currency import Currency, CurrencyParseError, FormatPart, UnknownCurrencyError, get_currency
from ..core.iso4217 import ISO_4217_CURRENCIES
from ..core.quantities import QuantityDefinitionError


def _get_currency(code: str, locale: str | None) -> Currency:
    try:
        return get_currency(code, locale)
    except UnknownCurrencyError:
        raise click.ClickException(f"Unknown currency code: {code}")
    except QuantityDefinitionError as e:
        raise click.ClickException(str(e))


@click.group()
def currency() -> None:
    """Currency formatting and parsing commands."""
    pass


@currency.command(name="format")
@click.argument("code")
@click.argument("base_value", type=int)
@click.option("--simple", is_flag=True, help="Leave out the currency symbol and group marks")
@click.option("--no-symbol", is_flag=True, help="Leave out the currency symbol")
@click.option("--locale", help="Locale such as en_US or de_DE (default from configuration)")
def format_command(code: str, base_value: int, simple: bool, no_symbol: bool, locale: str | None) -> None:
    """
    Format an integer base value as a currency string.

    Examples:
      ledgernum currency format USD 123456
      ledgernum currency format EUR 123456 --locale de_DE
    """
    if simple and no_symbol:
        raise click.UsageError("Use either --simple or --no-symbol, not both")

    definition = _get_currency(code, locale)
    if simple:
        click.echo(definition.base_value_to_simple_string(base_value))
    elif no_symbol:
        click.echo(definition.format_base_value_with_parts(base_value, FormatPart.CURRENCY))
    else:
        click.echo(definition.base_value_to_string(base_value))


@currency.command(name="parse")
@click.argument("code")
@click.argument("text")
@click.option("--locale", help="Locale such as en_US or de_DE (default from configuration)")
def parse_command(code: str, text: str, locale: str | None) -> None:
    """
    Parse a currency string into its base value.

    Example:
      ledgernum currency parse USD '$1,234.56'
    """
    definition = _get_currency(code, locale)
    try:
        base_value = definition.base_value_from_string(text)
    except CurrencyParseError as e:
        raise click.ClickException(str(e))

    click.echo(f"Base value: {base_value}")
    click.echo(f"Value: {definition.base_value_to_string(base_value)}")


@currency.command(name="list")
def list_command() -> None:
    """List the ISO 4217 currencies."""
    for info in ISO_4217_CURRENCIES.values():
        click.echo(f"{info.code}  {info.numeric_code:03d}  {info.decimal_places}  {info.name}")
