# -----------------------------------------------------------------------------
#  crt.py
#  Chinese Remainder and Garner mixed-radix reconstruction
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable

from sympy.core.intfunc import igcdex

from ntalgo.utility import as_int


def chinese_remainder(a1: int, n1: int, a2: int, n2: int) -> tuple[int, int]:
    """
    Combine x ≡ a1 (mod n1) and x ≡ a2 (mod n2) into x ≡ a (mod n).

    n = lcm(n1, n2) and 0 ≤ a < n. The moduli need not be coprime; when the
    two congruences contradict each other ((a2 - a1) not divisible by
    gcd(n1, n2)) the sentinel (0, 0) is returned.

    >>> chinese_remainder(2, 3, 3, 5)
    (8, 15)
    """
    a1, n1 = as_int(a1, "a1"), as_int(n1, "n1")
    a2, n2 = as_int(a2, "a2"), as_int(n2, "n2")
    if n1 <= 0 or n2 <= 0:
        raise ValueError(f"moduli must be positive, got {n1} and {n2}")
    # n1·x1 + n2·x2 = g
    x1, x2, g = (int(v) for v in igcdex(n1, n2))
    if (a2 - a1) % g != 0:
        return 0, 0
    t1 = a1 * x2 % n1
    t2 = a2 * x1 % n2
    n1 //= g
    n2 //= g
    n = n1 * n2 * g
    return (t1 * n2 + t2 * n1) % n, n


def chinese_remainder_all(congruences: Iterable[tuple[int, int]]) -> tuple[int, int]:
    """
    Fold any number of congruences (a_i, n_i) into one. Returns (0, 1) for no
    congruences and (0, 0) as soon as two of them are incompatible.
    """
    a, n = 0, 1
    for ai, ni in congruences:
        a, n = chinese_remainder(a, n, ai, ni)
        if n == 0:
            return 0, 0
    return a, n


def garner(congruences: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """
    Mixed-radix coefficients of u, given as u ≡ a_i (mod m_i).

    Returns [(x_i, m_i), ...] with 0 ≤ x_i < m_i such that
    u = Σ x_i · (m_0 · ... · m_{i-1}), unique modulo Π m_i.
    The moduli must be pairwise coprime; otherwise the modular inverse fails
    with ValueError.
    """
    out: list[tuple[int, int]] = []
    for a, m in congruences:
        a, m = as_int(a, "a"), as_int(m, "m")
        y = a % m
        for xj, mj in out:
            y = (y - xj) * pow(mj, -1, m) % m
        out.append((y, m))
    return out


def mixed_radix_value(coefficients: Iterable[tuple[int, int]]) -> int:
    """Σ x_i · (m_0 · ... · m_{i-1}) for Garner's [(x_i, m_i), ...]."""
    u, radix = 0, 1
    for x, m in coefficients:
        u += x * radix
        radix *= m
    return u
