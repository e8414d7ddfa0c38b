# -----------------------------------------------------------------------------
#  modular.py
#  Small modular-arithmetic helpers
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Sequence

from ntalgo.utility import as_int


def jacobi(n: int, m: int) -> int:
    """
    Jacobi symbol (n/m) for odd m > 0.

    For prime m this is the Legendre symbol: 0 if m | n, +1 for a quadratic
    residue, -1 for a non-residue. For composite m, +1 does not imply n is
    a residue.
    """
    n, m = as_int(n, "n"), as_int(m, "m")
    if m <= 0 or m % 2 == 0:
        raise ValueError(f"jacobi symbol needs an odd positive modulus, got {m}")
    j = 1
    while True:
        if m == 1:
            return j
        n %= m
        if n == 0:
            return 0
        e = 0
        while n % 2 == 0:
            n //= 2
            e += 1
        if e % 2 == 1 and m % 8 in (3, 5):
            j = -j
        if n % 4 == 3 and m % 4 == 3:
            j = -j
        n, m = m, n


def powers(n: int, b: int, m: int | None = None) -> list[int]:
    """[b^0, b^1, ..., b^(n-1)], reduced mod m when m is given."""
    table = [1 % m if m else 1]
    for _ in range(1, n):
        v = table[-1] * b
        table.append(v % m if m else v)
    return table[:max(n, 0)]


def factorials(n: int, m: int | None = None) -> list[int]:
    """[0!, 1!, ..., (n-1)!], reduced mod m when m is given."""
    table = [1 % m if m else 1]
    for i in range(1, n):
        v = table[-1] * i
        table.append(v % m if m else v)
    return table[:max(n, 0)]


def factorial_mod_p(n: int, p: int, fact_table: Sequence[int]) -> tuple[int, int]:
    """
    Return (r, e) where p^e is the largest power of p dividing n! and
    r = (n! / p^e) mod p. O(p + log_p n) with `fact_table = factorials(p, p)`.
    """
    r, e = 1 % p, 0
    while n > 1:
        r = r * fact_table[n % p] % p
        n //= p
        e += n
        # Wilson: each full block of p-1 residues contributes (p-1)! ≡ -1
        if n % 2 == 1:
            r = -r % p
    return r, e


def binomial_mod_p(n: int, k: int, p: int, fact_table: Sequence[int]) -> tuple[int, int]:
    """
    Return (r, e) for C(n, k) = p^e · r' with r = r' mod p; C(n, k) ≡ 0 (mod p)
    exactly when e > 0.
    """
    if k < 0 or k > n:
        return 0, 0
    fn, en = factorial_mod_p(n, p, fact_table)
    fk, ek = factorial_mod_p(k, p, fact_table)
    fl, el = factorial_mod_p(n - k, p, fact_table)
    return fn * pow(fk * fl, -1, p) % p, en - ek - el
