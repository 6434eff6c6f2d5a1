#!/usr/bin/env python3
"""
Exact Ratio Primitive

A Ratio keeps every numerator and denominator factor it was built from instead
of dividing them out. Multiplying ratios only concatenates factor lists, so any
number of chained multiplications stays exact. Reduction to a single
numerator/denominator pair happens on request by cancelling common prime
factors.

Examples:
    >>> third_of_billion = Ratio(1_000_000_000, 3)
    >>> scale = third_of_billion.multiply(Ratio(3, 10))
    >>> scale.get_reduced_numerator_denominator()
    (100000000, 1)
    >>> scale.to_value()
    100000000.0

    Compare with floats, where 1e9 / 3 * 3 / 10 == 99999999.99999999
"""

import math
from fractions import Fraction
from numbers import Number
from typing import TYPE_CHECKING, Any

from .integer_math import round_div, to_fraction
from .primes import reduce_to_simple_primes

if TYPE_CHECKING:
    from .quantities import Quantity


def _collect_factors(args: tuple[Any, ...]) -> tuple[list[int], list[int]]:
    """Normalize the accepted constructor argument shapes into two factor lists."""
    if not args:
        return [1], [1]

    if len(args) == 1 and isinstance(args[0], dict):
        return list(args[0]["numerators"]), list(args[0]["denominators"])

    if len(args) == 2 and isinstance(args[0], int) and isinstance(args[1], int):
        return [args[0]], [args[1]]

    if (
        len(args) == 2
        and isinstance(args[0], list)
        and isinstance(args[1], list)
        and all(isinstance(value, int) for value in args[0] + args[1])
    ):
        if len(args[0]) != len(args[1]):
            raise ValueError("Numerator and denominator lists must have the same length")
        return list(args[0]), list(args[1])

    numerators: list[int] = []
    denominators: list[int] = []
    for arg in args:
        items = arg if isinstance(arg, (list, tuple)) else [arg]
        for item in items:
            if isinstance(item, Ratio):
                numerators.extend(item._numerators)
                denominators.extend(item._denominators)
            elif isinstance(item, int):
                numerators.append(item)
                denominators.append(1)
            else:
                raise TypeError(f"Cannot build a Ratio from {type(item).__name__}")
    return numerators, denominators


class Ratio:
    """
    Immutable exact ratio stored as unreduced numerator and denominator factors.

    Accepted constructor forms:
        Ratio()                         -> 1/1
        Ratio(numerator)                -> numerator/1
        Ratio(numerator, denominator)
        Ratio([n1, n2], [d1, d2])       -> (n1*n2)/(d1*d2)
        Ratio([n1, ratio_a, n2])        -> integers get a denominator of 1
        Ratio(ratio_a, ratio_b, ...)    -> product of the ratios
        Ratio({"numerators": [...], "denominators": [...]})
    """

    __slots__ = ("_numerators", "_denominators")

    def __init__(self, *args: Any) -> None:
        numerators, denominators = _collect_factors(args)
        self._numerators = tuple(numerators)
        self._denominators = tuple(denominators)

    @classmethod
    def _from_factors(cls, numerators: tuple[int, ...], denominators: tuple[int, ...]) -> "Ratio":
        ratio = cls.__new__(cls)
        ratio._numerators = numerators
        ratio._denominators = denominators
        return ratio

    @classmethod
    def from_json(cls, json_value: "dict[str, list[int]] | Ratio") -> "Ratio":
        """Create a Ratio from its JSON form, passing Ratio objects through."""
        if isinstance(json_value, Ratio):
            return json_value
        return cls(json_value)

    def to_json(self) -> dict[str, list[int]]:
        """Serialize to {"numerators": [...], "denominators": [...]}."""
        return {
            "numerators": list(self._numerators),
            "denominators": list(self._denominators),
        }

    def get_numerators(self) -> list[int]:
        """Get the unreduced numerator factors, in order."""
        return list(self._numerators)

    def get_denominators(self) -> list[int]:
        """Get the unreduced denominator factors, in order."""
        return list(self._denominators)

    def inverse(self) -> "Ratio":
        """Return the reciprocal of this ratio."""
        return Ratio._from_factors(self._denominators, self._numerators)

    def multiply(self, other: "Ratio") -> "Ratio":
        """Return the product of this and another ratio (factor lists concatenated)."""
        return Ratio._from_factors(
            self._numerators + other._numerators,
            self._denominators + other._denominators,
        )

    def divide(self, other: "Ratio") -> "Ratio":
        """Return this ratio divided by another, same as self.multiply(other.inverse())."""
        return Ratio._from_factors(
            self._numerators + other._denominators,
            self._denominators + other._numerators,
        )

    def get_reduced_numerator_denominator(self) -> tuple[int, int]:
        """
        Reduce all factors to a single numerator and denominator.

        Common simple-prime factors are cancelled exactly, as is any common
        factor of the leftover remainders. The sign is carried by the numerator.
        A zero numerator reduces to 0/1 and a zero denominator to +/-1/0.

        Returns:
            Tuple of (numerator, denominator)
        """
        num_primes = reduce_to_simple_primes(self._numerators)
        den_primes = reduce_to_simple_primes(self._denominators)
        if num_primes.is_zero or den_primes.is_zero:
            sign = num_primes.sign * den_primes.sign
            return (0 if num_primes.is_zero else sign), (0 if den_primes.is_zero else 1)

        powers = dict(num_primes.primes)
        for prime, count in den_primes.primes.items():
            powers[prime] = powers.get(prime, 0) - count

        numerator = num_primes.remainder
        denominator = den_primes.remainder
        common = math.gcd(numerator, denominator)
        if common > 1:
            numerator //= common
            denominator //= common

        for prime, count in powers.items():
            if count > 0:
                numerator *= prime**count
            elif count < 0:
                denominator *= prime**-count

        return num_primes.sign * den_primes.sign * numerator, denominator

    def reduce(self) -> "Ratio":
        """Return an equivalent Ratio with a single numerator and denominator factor."""
        numerator, denominator = self.get_reduced_numerator_denominator()
        return Ratio(numerator, denominator)

    def to_fraction(self) -> Fraction:
        """Exact value as a Fraction. Raises ZeroDivisionError for a zero denominator."""
        numerator, denominator = self.get_reduced_numerator_denominator()
        return Fraction(numerator, denominator)

    def to_value(self) -> float:
        """
        Approximate value of the ratio as a float.

        This is lossy and meant for display or comparison, not for further exact
        composition. 0/0 is treated as 1; n/0 is a signed infinity.
        """
        numerator, denominator = self.get_reduced_numerator_denominator()
        if numerator == denominator:
            return 1.0
        if denominator == 0:
            return math.copysign(math.inf, numerator)
        return numerator / denominator

    def apply_to_number(self, number: Number) -> Number:
        """
        Multiply a number by this ratio using the reduced integer factors.

        Integer inputs that divide evenly give an exact integer result.
        """
        numerator, denominator = self.get_reduced_numerator_denominator()
        if isinstance(number, int):
            product = number * numerator
            if product % denominator == 0:
                return product // denominator
            return product / denominator
        return float(to_fraction(number) * numerator / denominator)

    def apply_to_quantity(self, quantity: "Quantity") -> "Quantity":
        """
        Scale a quantity's base value by this ratio, rounding half away from zero once.

        The result keeps the quantity's definition.
        """
        numerator, denominator = self.get_reduced_numerator_denominator()
        base_value = round_div(quantity.base_value * numerator, denominator)
        return quantity.definition.from_base_value(base_value)

    def __eq__(self, other: object) -> bool:
        """Factor-list equality, matching the serialized form."""
        if not isinstance(other, Ratio):
            return NotImplemented
        return (
            self._numerators == other._numerators
            and self._denominators == other._denominators
        )

    def __hash__(self) -> int:
        return hash((self._numerators, self._denominators))

    def __mul__(self, other: "Ratio") -> "Ratio":
        return self.multiply(other)

    def __truediv__(self, other: "Ratio") -> "Ratio":
        return self.divide(other)

    def __repr__(self) -> str:
        return f"Ratio(numerators={list(self._numerators)}, denominators={list(self._denominators)})"
