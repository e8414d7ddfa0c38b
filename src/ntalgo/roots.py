# -----------------------------------------------------------------------------
#  roots.py
#  Modular square roots, primitive roots and k-th roots
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable
from math import gcd

from sympy import discrete_log

from ntalgo.arith import carmichael_lambda, euler_phi, prime_factors
from ntalgo.modular import jacobi
from ntalgo.sieve import PrimeHolder
from ntalgo.utility import as_int


def _quad_mul(x: tuple[int, int], y: tuple[int, int], d: int, p: int) -> tuple[int, int]:
    # (a + b√d)(c + e√d) = (ac + be·d) + (ae + bc)√d
    a, b = x
    c, e = y
    return (a * c + b * e % p * d) % p, (a * e + b * c) % p


def _quad_pow(x: tuple[int, int], k: int, d: int, p: int) -> tuple[int, int]:
    r = (1 % p, 0)
    while k > 0:
        if k & 1:
            r = _quad_mul(r, x, d, p)
        x = _quad_mul(x, x, d, p)
        k >>= 1
    return r


def sqrt_cipolla(y: int, p: int) -> int:
    """
    Square root of y modulo an odd prime p (Cipolla's algorithm).

    Finds the first a = 1, 2, ... with d = a² - y a non-residue, then
    (a + √d)^((p+1)/2) in F_p(√d) has zero irrational part and its rational
    part squares to y. Either root may be returned; the other is p - r.

    Raises ValueError when y is not a quadratic residue mod p. p is assumed
    prime and is not checked.
    """
    y, p = as_int(y, "y"), as_int(p, "p")
    y %= p
    if y == 0 or p == 2:
        return y
    half = (p - 1) // 2
    if pow(y, half, p) != 1:
        raise ValueError(f"{y} is not a quadratic residue modulo {p}")
    a = 0
    while True:
        a += 1
        d = (a * a - y) % p
        if jacobi(d, p) == -1:
            break
    return _quad_pow((a, 1), (p + 1) // 2, d, p)[0]


def sqrt_hensel_lift(y: int, p: int, k: int) -> int:
    """
    Square root of y modulo p^k for an odd prime p not dividing y.

    Starts from the Cipolla root mod p and applies Newton steps
    r ← r - f(r)·f'(r)⁻¹ with f(r) = r² - y; each step squares the modulus
    until p^k is reached. f'(r)⁻¹ = (2r)^(φ(p^i) - 1) by Euler's theorem.
    """
    y, p, k = as_int(y, "y"), as_int(p, "p"), as_int(k, "k")
    if k < 1:
        raise ValueError(f"exponent k must be ≥ 1, got {k}")
    if p % 2 == 0:
        raise ValueError("Hensel lifting of square roots needs an odd prime")
    if y % p == 0:
        raise ValueError(f"{y} is divisible by {p}; its roots do not lift uniquely")
    mod = p
    r = sqrt_cipolla(y, p)
    target = p ** k
    i = 1
    while i < k:
        phi = mod // p * (p - 1)
        u = pow(2 * r, phi - 1, mod)
        mod = mod * mod if i * 2 < k else target
        v = (r * r - y) % mod
        r = (r - v * u) % mod
        i *= 2
    return r


def primitive_root(m: int, phi: int, phi_factors: Iterable[int]) -> int:
    """
    Smallest primitive root modulo m, i.e. the first g coprime to m with
    g^(φ/q) ≠ 1 for every prime q | φ. Returns 0 if there is none.

    Only m = 2, 4, p^k and 2p^k have primitive roots.
    """
    m, phi = as_int(m, "m"), as_int(phi, "phi")
    qs = [int(q) for q in phi_factors]
    for g in range(1, m):
        if gcd(g, m) > 1:
            continue
        if all(pow(g, phi // q, m) != 1 for q in qs):
            return g
    return 0


def primitive_root_of(m: int, holder: PrimeHolder) -> int:
    """primitive_root with φ(m) and its prime factors taken from `holder`."""
    phi = euler_phi(holder.factor_integer(m))
    return primitive_root(m, phi, prime_factors(holder.factor_integer(phi)))


def kth_roots_of_unity(m: int, k: int, lam: int, g: int) -> set[int]:
    """
    The k-th roots of unity modulo m, given λ(m) and a primitive root g.
    There are d = gcd(k, λ) of them: w^0, ..., w^(d-1) with w = g^(λ/d).
    """
    d = gcd(k, lam)
    if d == 0:
        return set()
    w = pow(g, lam // d, m)
    r = 1 % m
    roots = set()
    for _ in range(d):
        roots.add(r)
        r = r * w % m
    return roots


def kth_roots_of_unity_of(m: int, k: int, holder: PrimeHolder) -> set[int]:
    lam = carmichael_lambda(holder.factor_integer(m))
    return kth_roots_of_unity(m, k, lam, primitive_root_of(m, holder))


def kth_roots(m: int, k: int, phi: int, g: int, l: int) -> set[int]:
    """
    All x with x^k ≡ n (mod m), where n = g^l for a primitive root g and φ = φ(m).

    With d = gcd(k, φ) there are d solutions when d | l and none otherwise
    (an empty set is returned).
    """
    d = gcd(k, phi)
    if d == 0 or l % d != 0:
        return set()
    phi //= d
    l //= d
    k //= d
    # g^(l/k) is one root; the others differ by the d-th roots of unity
    h = l * pow(k, -1, phi) % phi if phi > 1 else 0
    r = pow(g, h, m)
    w = pow(g, phi, m)
    roots = set()
    for _ in range(d):
        roots.add(r)
        r = r * w % m
    return roots


def kth_roots_of(n: int, m: int, k: int, holder: PrimeHolder) -> set[int]:
    """
    All k-th roots of n modulo m (m = 2, 4, p^k or 2p^k, gcd(n, m) = 1),
    solving g^l ≡ n for l with sympy's discrete_log.
    """
    if gcd(n, m) != 1:
        raise ValueError(f"{n} is not a unit modulo {m}")
    phi = euler_phi(holder.factor_integer(m))
    g = primitive_root_of(m, holder)
    l = int(discrete_log(m, n % m, g)) if m > 2 else 0
    return kth_roots(m, k, phi, g, l)
