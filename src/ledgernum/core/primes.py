#!/usr/bin/env python3
"""
Prime Factorization Utilities

Reduces integers into powers of "simple" primes (primes below a fixed bound).
Used by Ratio to cancel common factors between numerators and denominators
without ever performing a division that could lose precision.
"""

from dataclasses import dataclass, field
from typing import Iterable

# Factors at or above this bound are left in the remainder.
SIMPLE_PRIME_BOUND = 1000


def _sieve(bound: int) -> tuple[int, ...]:
    """Sieve of Eratosthenes for all primes below bound."""
    is_prime = [True] * bound
    is_prime[0:2] = [False, False]
    for candidate in range(2, int(bound**0.5) + 1):
        if is_prime[candidate]:
            is_prime[candidate * candidate :: candidate] = [False] * len(
                range(candidate * candidate, bound, candidate)
            )
    return tuple(value for value, flag in enumerate(is_prime) if flag)


SIMPLE_PRIMES = _sieve(SIMPLE_PRIME_BOUND)


@dataclass
class PrimeFactorization:
    """
    Result of reducing one or more integers to simple primes.

    Attributes:
        sign: Overall sign of the nonzero inputs, 1 or -1
        remainder: Product of the factors that could not be reduced to simple
            primes (1 when fully factored, 0 when any input was zero)
        primes: Mapping of simple prime to its total exponent
    """

    sign: int = 1
    remainder: int = 1
    primes: dict[int, int] = field(default_factory=dict)

    @property
    def is_zero(self) -> bool:
        """True if the product of the inputs is zero."""
        return self.remainder == 0


def _reduce_single(number: int) -> PrimeFactorization:
    sign = 1
    if number < 0:
        sign = -1
        number = -number

    primes: dict[int, int] = {}
    for prime in SIMPLE_PRIMES:
        if prime > number:
            break
        count = 0
        while number % prime == 0:
            number //= prime
            count += 1
        if count:
            primes[prime] = count

    return PrimeFactorization(sign=sign, remainder=number, primes=primes)


def reduce_to_simple_primes(number: int | Iterable[int]) -> PrimeFactorization:
    """
    Reduce an integer, or the product of several integers, to simple primes.

    Args:
        number: An integer, or an iterable of integers whose product is reduced

    Returns:
        PrimeFactorization of the (product of the) input(s)

    Examples:
        reduce_to_simple_primes(1) -> sign=1, remainder=1, primes={}
        reduce_to_simple_primes(-40) -> sign=-1, remainder=1, primes={2: 3, 5: 1}
        reduce_to_simple_primes([6, 0, 15]) -> sign=1, remainder=0, primes={2: 1, 3: 2, 5: 1}
    """
    if isinstance(number, int):
        return _reduce_single(number)

    result = PrimeFactorization()
    is_zero = False
    for value in number:
        if not value:
            is_zero = True
            continue

        single = _reduce_single(value)
        result.sign *= single.sign
        result.remainder *= single.remainder
        for prime, power in single.primes.items():
            result.primes[prime] = result.primes.get(prime, 0) + power

    if is_zero:
        result.remainder = 0

    return result
