#!/usr/bin/env python3
"""
Exact Integer Arithmetic Helpers

Shared helpers for the fixed-point quantity system. Every conversion between a
decimal number and a scaled integer goes through these functions so that no
floating-point arithmetic ever touches a base value.

Key Principles:
- Numbers are converted via their shortest decimal representation, so 1.005
  is treated as exactly 1.005 rather than its binary approximation
- Rounding is always half away from zero
- Rescaling between resolutions is pure integer arithmetic
"""

from decimal import Decimal
from fractions import Fraction
from numbers import Number


def round_div(numerator: int, denominator: int) -> int:
    """
    Divide two integers, rounding half away from zero.

    Args:
        numerator: The dividend
        denominator: The divisor, must not be zero

    Returns:
        The rounded integer quotient

    Examples:
        round_div(5, 2) -> 3
        round_div(-5, 2) -> -3
        round_div(1, 3) -> 0
    """
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    quotient, remainder = divmod(abs(numerator), denominator)
    if remainder * 2 >= denominator:
        quotient += 1
    return quotient if numerator >= 0 else -quotient


def to_fraction(number: Number) -> Fraction:
    """
    Convert a number to an exact Fraction.

    Floats are converted through their shortest round-tripping decimal string so
    that values like 0.1 become exactly 1/10.

    Raises:
        ValueError: If the number is NaN or infinite
        TypeError: If the argument is not a number
    """
    if isinstance(number, Fraction):
        return number
    if isinstance(number, bool):
        raise TypeError("Booleans are not numbers here")
    if isinstance(number, int):
        return Fraction(number)
    if isinstance(number, float):
        return Fraction(Decimal(repr(number)))
    if isinstance(number, Decimal):
        return Fraction(number)
    raise TypeError(f"Expected a number, got {type(number).__name__}")


def round_fraction(value: Fraction) -> int:
    """Round a Fraction to the nearest integer, half away from zero."""
    return round_div(value.numerator, value.denominator)


def scale_to_integer(number: Number, decimal_places: int) -> int:
    """
    Convert a number to an integer base value at a given resolution.

    Args:
        number: The number to convert
        decimal_places: Number of decimal places, may be negative

    Returns:
        round(number * 10^decimal_places), rounded half away from zero

    Examples:
        scale_to_integer(12.345, 2) -> 1235
        scale_to_integer(1234, -2) -> 12
    """
    return round_fraction(to_fraction(number) * Fraction(10) ** decimal_places)


def rescale(base_value: int, from_places: int, to_places: int) -> int:
    """
    Move an integer base value from one resolution to another.

    Increasing the resolution is exact; decreasing it rounds half away from zero.
    """
    shift = to_places - from_places
    if shift >= 0:
        return base_value * 10**shift
    return round_div(base_value, 10**-shift)
