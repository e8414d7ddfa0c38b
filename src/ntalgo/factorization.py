# -----------------------------------------------------------------------------
#  factorization.py
#  Pollard's Rho, trial division and table-driven factorization
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys
from collections.abc import MutableMapping, Sequence
from time import perf_counter

import gmpy2

from ntalgo.context import Factorization
from ntalgo.primality import is_prime_lru
from ntalgo.runtime import CFG
from ntalgo.runtime import current as _rt_current
from ntalgo.utility import as_int


def _budget(value: int | None, key: str) -> int:
    if value is not None:
        return int(value)
    return int(CFG(key))


def pollard_rho(n: int, k: int = 2, a: int = 1, max_inner_iter: int | None = None) -> int:
    """
    Pollard's Rho: try to find a non-trivial, not necessarily prime, factor of n.

    Iterates g(x) = x² + a from x = y = k with Floyd's two-speed walk and
    returns gcd(|x - y|, n) once it differs from 1. Returns n itself when the
    walk closes on n or `max_inner_iter` steps pass without a hit; retry with
    other k and a in that case (see pollard_rho_repeated).

    n should already be known to be composite (see primality.is_probable_prime).
    Expected O(√p) steps, p the smallest prime factor of n.
    """
    n = as_int(n, "n")
    if n == 0:
        return 0
    if n == 1:
        return 1
    if n % 2 == 0:
        return 2

    budget = _budget(max_inner_iter, "FACTORING.MAX_INNER_ITER")
    nz = gmpy2.mpz(n)
    az = gmpy2.mpz(a)
    x = y = gmpy2.mpz(k) % nz
    d = gmpy2.mpz(1)
    while d == 1 and budget > 0:
        budget -= 1
        x = (x * x + az) % nz
        y = (y * y + az) % nz
        y = (y * y + az) % nz
        d = gmpy2.gcd(abs(x - y), nz)
    return n if d == 1 else int(d)


def pollard_rho_repeated(n: int, max_iter: int | None = None, max_inner_iter: int | None = None) -> int:
    """
    Run pollard_rho with k = a = 2, 3, ..., max_iter and return the first
    non-trivial factor found, or n if every attempt failed.
    """
    n = as_int(n, "n")
    max_iter = _budget(max_iter, "FACTORING.MAX_ITER")
    inner = _budget(max_inner_iter, "FACTORING.MAX_INNER_ITER")
    debug = _rt_current().debug
    for k in range(2, max_iter + 1):
        d = pollard_rho(n, k, k, inner)
        if d != n:
            return d
        if debug:
            print(f"[rho] n≈{n.bit_length()} bits: attempt k=a={k} failed", file=sys.stderr)
    return n


def factor_integer(n: int, max_iter: int | None = None, max_inner_iter: int | None = None) -> Factorization:
    """
    General-purpose factorization of n ≥ 0 with Miller-Rabin + Pollard's Rho.

    A work stack starts as [n]. A prime popped from it also pulls every further
    power of itself out of the values still pending; a composite is split by
    pollard_rho_repeated and both parts are pushed back.

    When a composite cannot be split within the budget it is recorded as if it
    were prime, with exponent 1, and listed in `Factorization.unfactored`, so
    `result.incomplete` tells the caller the answer is not trustworthy.

    Pairs come out in discovery order, not sorted.

    >>> sorted(factor_integer(360))
    [(2, 3), (3, 2), (5, 1)]
    """
    n = as_int(n, "n")
    if n < 0:
        raise ValueError(f"cannot factor negative integer {n}")
    if n in (0, 1):
        return Factorization(n)

    slow_below = int(CFG("FACTORING.SLOW_THRESHOLD"))
    if slow_below and n < slow_below:
        return factor_integer_slow(n)

    debug = _rt_current().debug
    t0 = perf_counter()

    pairs: list[tuple[int, int]] = []
    unfactored: list[int] = []
    stack = [n]
    while stack:
        a = stack.pop()
        if a == 1:
            continue
        if is_prime_lru(a):
            e = 1
            for i, b in enumerate(stack):
                while b % a == 0:
                    b //= a
                    e += 1
                stack[i] = b
            pairs.append((a, e))
            continue
        d = pollard_rho_repeated(a, max_iter, max_inner_iter)
        if d in (1, a):
            if debug:
                print(f"[factor] giving up on {a} ({a.bit_length()} bits)", file=sys.stderr)
            pairs.append((a, 1))
            unfactored.append(a)
            continue
        stack.append(d)
        stack.append(a // d)

    if debug:
        print(f"[factor] n={n} done in {perf_counter() - t0:.3f}s, {len(pairs)} factor(s)", file=sys.stderr)
    return Factorization(n, tuple(pairs), tuple(unfactored))


def factor_integer_slow(n: int) -> Factorization:
    """Trial division, O(√n). Primes come out strictly increasing."""
    n = as_int(n, "n")
    if n < 0:
        raise ValueError(f"cannot factor negative integer {n}")
    orig = n
    pairs: list[tuple[int, int]] = []
    i = 2
    while i <= n // i:
        if n % i == 0:
            e = 0
            while n % i == 0:
                n //= i
                e += 1
            pairs.append((i, e))
        i += 1
    if n > 1:
        pairs.append((n, 1))
    return Factorization(orig, tuple(pairs))


def factor_integer_to_map(n: int, pf: Sequence[int], mf: MutableMapping[int, int] | None = None) -> MutableMapping[int, int]:
    """
    Add the prime factors of n to the mapping `mf` (created if None) using a
    prime-factor table `pf` covering 0..n inclusive (see sieve.factor).
    O(log n / log log n).

    A new mapping comes back keyed in increasing prime order; a supplied one
    keeps its own ordering.
    """
    n = as_int(n, "n")
    fresh = mf is None
    if mf is None:
        mf = {}
    while n > 1:
        p = int(pf[n])
        e = 0
        while n % p == 0:
            n //= p
            e += 1
        mf[p] = mf.get(p, 0) + e
    return dict(sorted(mf.items())) if fresh else mf


def factor_integer_table(n: int | Sequence[int], pf: Sequence[int]) -> Factorization:
    """
    Factor n, or the product of a list of integers, with the table `pf`.
    `pf` must cover every value up to the largest one. Primes strictly increasing.
    """
    values = [as_int(v) for v in n] if isinstance(n, Sequence) else [as_int(n, "n")]
    mf: dict[int, int] = {}
    total = 1
    for v in values:
        factor_integer_to_map(v, pf, mf)
        total *= v
    return Factorization(total, tuple(sorted(mf.items())))


def factor_out(n: int, p: int) -> int:
    """Remove every factor p from n."""
    if p in (0, 1, -1):
        raise ValueError(f"cannot factor out {p}")
    while n % p == 0:
        n //= p
    return n
