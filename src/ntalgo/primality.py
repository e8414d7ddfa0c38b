# -----------------------------------------------------------------------------
#  primality.py
#  Miller-Rabin primality testing
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache

from ntalgo.utility import as_int

# (exclusive upper bound, witness bases). Below each bound the listed bases
# make Miller-Rabin deterministic.
WITNESS_TABLE: tuple[tuple[int, tuple[int, ...]], ...] = (
    (2_047, (2,)),                                                  # 2^11
    (9_080_191, (31, 73)),                                          # 2^23
    (4_759_123_141, (2, 7, 61)),                                    # 2^32
    (1_122_004_669_633, (2, 13, 23, 1_662_803)),                    # 2^40
    (341_550_071_728_321, (2, 3, 5, 7, 11, 13, 17)),                # 2^48
    (3_825_123_056_546_413_051, (2, 3, 5, 7, 11, 13, 17, 19, 23)),  # 2^61
)

# Beyond the last bound the 9-base set is only a strong probable-prime test.
FALLBACK_BASES: tuple[int, ...] = WITNESS_TABLE[-1][1]


def witness_bases(n: int) -> tuple[int, ...]:
    """Return the smallest witness set that is deterministic for n, if any."""
    for bound, bases in WITNESS_TABLE:
        if n < bound:
            return bases
    return FALLBACK_BASES


def miller_rabin(n: int, bases: Iterable[int]) -> bool:
    """
    Miller-Rabin test of n against the given bases.

    True means n is a probable prime (error ≤ 4^-k for k random bases),
    False means n is certainly composite. Bases ≥ n are skipped.
    """
    n = as_int(n, "n")
    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False

    # n - 1 = 2^r * d, d odd
    d, r = n - 1, 0
    while d % 2 == 0:
        d //= 2
        r += 1

    for a in bases:
        a = int(a)
        if a >= n:
            continue
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = x * x % n
            if x == 1 or x == n - 1:
                break
        if x != n - 1:
            return False
    return True


def is_probable_prime(n: int) -> bool:
    """
    Deterministic Miller-Rabin for n < 3.825·10^18; above that the same nine
    bases give a best-effort strong probable-prime test.
    """
    n = as_int(n, "n")
    return miller_rabin(n, witness_bases(n))


@lru_cache(maxsize=100_000)
def is_prime_lru(n: int) -> bool:
    return is_probable_prime(n)
