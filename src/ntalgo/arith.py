# -----------------------------------------------------------------------------
#  arith.py
#  Arithmetic functions over a known factorization
# -----------------------------------------------------------------------------

"""
Every function here except fraction_reduce takes a factorization in any of
these shapes: a Factorization, a {prime: exponent} mapping, or an iterable
of (prime, exponent) pairs. None of them factor anything themselves.
"""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from math import gcd as _gcd
from typing import Any

from sympy import lcm

from ntalgo.utility import factor_pairs


def prime_factors(fac: Any) -> list[int]:
    return [p for p, _ in factor_pairs(fac)]


def prime_exponents(fac: Any) -> list[int]:
    return [e for _, e in factor_pairs(fac)]


def divisor_sigma0(fac: Any) -> int:
    """τ(n) = ∏ (e + 1)"""
    r = 1
    for _, e in factor_pairs(fac):
        r *= e + 1
    return r


def sigma_term(p: int, e: int) -> int:
    return (p ** (e + 1) - 1) // (p - 1)


def divisor_sigma1(fac: Any) -> int:
    """σ(n) = ∏ (p^(e+1) − 1)/(p − 1)"""
    s = 1
    for p, e in factor_pairs(fac):
        s *= sigma_term(p, e)
    return s


def euler_phi(fac: Any) -> int:
    """φ(n) = ∏ p^(e-1)·(p − 1)"""
    r = 1
    for p, e in factor_pairs(fac):
        r *= p ** (e - 1) * (p - 1)
    return r


def _lambda_prime_power(p: int, e: int) -> int:
    # λ(2^e) = 2^(e-2) for e ≥ 3, otherwise λ(p^e) = φ(p^e)
    if p == 2 and e > 2:
        e -= 1
    return p ** (e - 1) * (p - 1)


def carmichael_lambda(fac: Any) -> int:
    """λ(n) = lcm of λ(p^e) over the prime powers of n."""
    r = 1
    for p, e in factor_pairs(fac):
        r = int(lcm(r, _lambda_prime_power(p, e)))
    return r


def moebius_mu(fac: Any) -> int:
    pairs = factor_pairs(fac)
    if any(e > 1 for _, e in pairs):
        return 0
    return -1 if len(pairs) % 2 else 1


def squares_r(fac: Any, unique_only: bool = False) -> int:
    """
    Number of representations of n as a sum of two squares.

    unique_only=False counts ordered, signed pairs (r₂(n), e.g. 8 for n = 5);
    unique_only=True ignores sign and order, so 25 = 0² + 5² = 3² + 4² gives 2.
    """
    b, s, q = 1, 1, 1
    for p, e in factor_pairs(fac):
        if p % 4 == 1:
            b *= e + 1
        elif p % 4 == 3:
            if e % 2 == 1:
                b = 0
        elif p == 2 and e % 2 == 1:
            s = -1
        if e % 2 == 1:
            q = 0
    if not unique_only:
        return b * 4
    if b % 2 == 1:
        b -= s
    return b // 2 + q


def divisors(fac: Any, maxd: int = 0) -> list[int]:
    """
    All divisors of n from its factorization, ascending.
    With maxd > 0 only divisors ≤ maxd are produced (and branches that would
    exceed it are never expanded).
    """
    ds = [1]
    for p, e in factor_pairs(fac):
        nxt: list[int] = []
        for d in ds:
            x = d
            for _ in range(e + 1):
                nxt.append(x)
                if maxd > 0 and x > maxd // p:
                    break
                x *= p
        ds = nxt
    return sorted(ds)


def fraction_reduce(
    numerators: MutableSequence[int],
    denominators: MutableSequence[int],
    gcd: Callable[[int, int], int] = _gcd,
) -> tuple[MutableSequence[int], MutableSequence[int]]:
    """
    Cancel common factors between Π numerators and Π denominators in place,
    without forming either product.

    Each denominator is divided down against every numerator in turn, so
    afterwards no numerator shares a factor with any denominator. Useful
    before multiplying out binomial-style quotients.

    >>> fraction_reduce([6, 35], [10, 21])
    ([1, 1], [1, 1])
    """
    for j in range(len(denominators)):
        d = denominators[j]
        i = 0
        while d > 1 and i < len(numerators):
            g = gcd(numerators[i], d)
            if g > 1:
                d //= g
                numerators[i] //= g
            else:
                i += 1
        denominators[j] = d
    return numerators, denominators
