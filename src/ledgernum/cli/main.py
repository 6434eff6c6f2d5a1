#!/usr/bin/env python3
"""
Main CLI Entry Point for ledgernum

Provides a unified command-line interface to the numeric core.
"""

import logging
import os

import click

from .. import __author__, __version__
from ..core.config import get_config, reload_config
from .currency import currency
from .quantity import parse, ratio, split


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Show the active environment and locale")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    ledgernum - Exact Fixed-Point Quantities

    Parse, format, split and scale amounts without floating-point drift.
    """
    if config_env:
        os.environ["LEDGERNUM_ENV"] = config_env
        reload_config()

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger("ledgernum").setLevel(logging.DEBUG)
        click.echo("Debug logging enabled")

    ctx.obj = get_config()
    if verbose:
        click.echo(f"Environment: {ctx.obj.environment.value}")
        click.echo(f"Locale: {ctx.obj.locale}")


@main.command()
def version() -> None:
    """Show version information."""
    click.echo(f"ledgernum v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_obj
def config(config_obj) -> None:
    """Show current configuration."""
    click.echo("Current Configuration:")
    for label, value in (
        ("Environment", config_obj.environment.value),
        ("Locale", config_obj.locale),
        ("Default Decimal Places", config_obj.default_decimal_places),
        ("Debug Mode", config_obj.debug),
        ("Log Level", config_obj.log_level),
    ):
        click.echo(f"  {label}: {value}")


main.add_command(parse)
main.add_command(split)
main.add_command(ratio)
main.add_command(currency)


if __name__ == "__main__":
    main()
