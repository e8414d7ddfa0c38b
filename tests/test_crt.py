# tests/test_crt.py
"""
Chinese Remainder and Garner's mixed-radix coefficients.

Run: pytest -v tests/test_crt.py
"""

from __future__ import annotations

import random
from math import gcd, lcm, prod

import pytest

from ntalgo.crt import chinese_remainder, chinese_remainder_all, garner, mixed_radix_value
from ntalgo.fmt import format_congruences


def test_chinese_remainder_example():
    assert chinese_remainder(2, 3, 3, 5) == (8, 15)


def test_chinese_remainder_coprime_property():
    for n1 in range(1, 40):
        for n2 in range(1, 40):
            if gcd(n1, n2) != 1:
                continue
            for a1, a2 in ((0, 0), (n1 - 1, n2 - 1), (n1 // 2, n2 // 3), (5 * n1 + 1, -7)):
                a, n = chinese_remainder(a1, n1, a2, n2)
                assert n == n1 * n2
                assert 0 <= a < n
                assert a % n1 == a1 % n1
                assert a % n2 == a2 % n2


def test_chinese_remainder_non_coprime():
    assert chinese_remainder(1, 4, 3, 6) == (9, 12)
    assert chinese_remainder(0, 4, 2, 6) == (8, 12)
    for n1 in range(1, 30):
        for n2 in range(1, 30):
            for a1 in range(n1):
                a2 = (a1 + 3) % n2
                a, n = chinese_remainder(a1, n1, a2, n2)
                if (a2 - a1) % gcd(n1, n2):
                    assert (a, n) == (0, 0)
                else:
                    assert n == lcm(n1, n2)
                    assert a % n1 == a1 and a % n2 == a2


def test_chinese_remainder_inconsistent():
    assert chinese_remainder(1, 4, 2, 6) == (0, 0)


def test_chinese_remainder_wide_moduli():
    n1, n2 = 2**61 - 1, 2**64 - 59
    a1, a2 = n1 - 2, n2 - 3
    a, n = chinese_remainder(a1, n1, a2, n2)
    assert n == n1 * n2
    assert a % n1 == a1 and a % n2 == a2


def test_chinese_remainder_rejects_bad_moduli():
    with pytest.raises(ValueError):
        chinese_remainder(1, 0, 1, 5)


def test_chinese_remainder_all():
    assert chinese_remainder_all([(2, 3), (3, 5), (2, 7)]) == (23, 105)
    assert chinese_remainder_all([]) == (0, 1)
    assert chinese_remainder_all([(1, 4), (2, 6), (0, 5)]) == (0, 0)


def test_garner_round_trip():
    rng = random.Random(7)
    moduli = [3, 5, 7, 11, 13, 17, 19, 23]
    total = prod(moduli)
    for _ in range(200):
        u = rng.randrange(total)
        cong = [(u % m, m) for m in moduli]
        coeffs = garner(cong)
        assert [m for _, m in coeffs] == moduli
        assert all(0 <= x < m for x, m in coeffs)
        assert mixed_radix_value(coeffs) == u


def test_garner_big_primes():
    moduli = [1_000_000_007, 998_244_353, 2**61 - 1]
    u = 123_456_789_012_345_678_901_234_567
    coeffs = garner([(u % m, m) for m in moduli])
    assert mixed_radix_value(coeffs) == u % prod(moduli)


def test_garner_needs_coprime_moduli():
    with pytest.raises(ValueError):
        garner([(1, 4), (3, 6)])


def test_format_congruences():
    assert format_congruences([(2, 3), (3, 5)]) == "x ≡ 2 (mod 3), x ≡ 3 (mod 5)"


def test_package_exports_crt():
    import ntalgo

    assert ntalgo.chinese_remainder is chinese_remainder
    assert ntalgo.chinese_remainder(1, 4, 3, 6) == (9, 12)
