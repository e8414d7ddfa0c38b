# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


class UserInputError(Exception):
    pass


def as_int(x: Any, label: str = "value") -> int:
    """
    Normalise an integer-like value (int, bool excluded, gmpy2.mpz, numpy ints)
    to a plain Python int. Floats are rejected even when integral.
    """
    if isinstance(x, bool):
        raise TypeError(f"{label} must be an integer, not bool")
    if isinstance(x, int):
        return int(x)
    if isinstance(x, float):
        raise TypeError(f"{label} must be an integer, not float")
    try:
        v = int(x)
    except (TypeError, ValueError):
        raise TypeError(f"{label} must be an integer, got {type(x).__name__}") from None
    if v != x:
        raise TypeError(f"{label} is not integral: {x!r}")
    return v


def narrow(value: int, bits: int = 64, *, signed: bool = True) -> int:
    """
    Check that `value` fits a fixed-width integer of `bits` bits and return it.

    Python ints never overflow, so callers that must agree with 32/64-bit
    arithmetic elsewhere use this to fail loudly instead of diverging.
    """
    v = as_int(value)
    if signed:
        lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        lo, hi = 0, (1 << bits) - 1
    if not lo <= v <= hi:
        kind = "int" if signed else "uint"
        raise OverflowError(f"{v} does not fit in {kind}{bits}")
    return v


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles negative n."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2)), then fix up the decade
    est = (n.bit_length() * 30103) // 100000
    p10 = 10 ** est
    while n < p10:
        est -= 1
        p10 //= 10
    p10 *= 10
    while n >= p10:
        est += 1
        p10 *= 10
    return est + 1


def factor_pairs(fac: Any) -> list[tuple[int, int]]:
    """
    Accept a Factorization, a {prime: exponent} mapping or an iterable of
    (prime, exponent) pairs and return a plain list of int pairs.
    """
    if isinstance(fac, Mapping):
        items: Iterable = fac.items()
    else:
        items = fac
    return [(int(p), int(e)) for p, e in items]



_DIGIT_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"


def integer_digits(n: int, b: int = 10, length: int = 0) -> list[int]:
    """
    Digits of n ≥ 0 in base b, least significant first, zero-padded to
    `length`. integer_digits(0, b) is [] unless padded.
    """
    n, b = as_int(n, "n"), as_int(b, "b")
    if b < 2:
        raise ValueError(f"base must be ≥ 2, got {b}")
    if n < 0:
        raise ValueError(f"cannot take digits of negative integer {n}")
    digits: list[int] = []
    while n > 0:
        n, r = divmod(n, b)
        digits.append(r)
    digits.extend([0] * (length - len(digits)))
    return digits


def digits_string(digits: Iterable[int]) -> str:
    """Lowercase string for least-significant-first digits (bases up to 36)."""
    return "".join(_DIGIT_CHARS[d] for d in reversed(list(digits)))


def integer_string(n: int, b: int = 10, length: int = 0) -> str:
    """
    n in base b (2..36), lowercase, zero-padded to `length` characters.

    >>> integer_string(255, 16)
    'ff'
    """
    if not 2 <= b <= len(_DIGIT_CHARS):
        raise ValueError(f"base must be in 2..36, got {b}")
    return digits_string(integer_digits(n, b, length))
