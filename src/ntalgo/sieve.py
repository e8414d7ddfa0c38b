# -----------------------------------------------------------------------------
#  sieve.py
#  Prime sieves and arithmetic-function tables
# -----------------------------------------------------------------------------

"""
Batch tables over a contiguous range of integers.

Every table function writes into a caller-allocated mutable sequence (list,
bytearray, array.array, numpy array, ...) that is indexed from 0 and is at
least as long as the range; the buffer is filled in place and never resized.
The same buffer is returned for convenience.

Full tables cover [0, n). Segmented tables cover [b, e) with index i - b and
only need the primes up to √(e-1), so b can be far beyond what a table
starting at 0 could hold.
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from itertools import compress, islice
from math import isqrt

from ntalgo.context import Factorization
from ntalgo.factorization import factor_integer, factor_integer_table
from ntalgo.primality import is_probable_prime


def _require(buf: Sequence, size: int, name: str) -> None:
    if len(buf) < size:
        raise ValueError(f"{name} needs room for {size} values, has {len(buf)}")


def _fill(buf: MutableSequence, values: Sequence[int], name: str) -> MutableSequence:
    _require(buf, len(values), name)
    try:
        buf[:len(values)] = values
    except TypeError:
        # array.array only accepts slices of its own type
        for i, v in enumerate(values):
            buf[i] = v
    return buf


def _small_primes(p: Sequence[int], m: int, limit: int):
    """Primes from p[:m] whose square is below `limit`."""
    for pr in islice(p, m):
        pr = int(pr)
        if pr * pr >= limit:
            break
        yield pr


def _first_multiple(pr: int, b: int, lo: int) -> int:
    """Smallest multiple of pr that is ≥ max(b, lo)."""
    start = max(b, lo)
    return -(-start // pr) * pr


def _eratosthenes(n: int) -> bytearray:
    s = bytearray([1]) * n
    s[:min(n, 2)] = bytes(min(n, 2))
    for i in range(2, isqrt(max(n - 1, 0)) + 1):
        if s[i]:
            s[i * i::i] = bytes(len(range(i * i, n, i)))
    return s


def primes(n: int, p: MutableSequence[int] | None = None, q: MutableSequence[int] | None = None) -> int:
    """
    Sieve of Eratosthenes for [0, n). O(n log log n).

    Stores the primes below n into `p` (room for π(n) values) and/or the
    0/1 primality flags into `q` (room for n values). At least one of the two
    must be given. Returns π(n), the number of primes below n.
    """
    if p is None and q is None:
        raise ValueError("primes() needs at least one output: p or q")
    n = max(int(n), 0)
    s = _eratosthenes(n)
    if q is not None:
        _fill(q, s, "q")
    found = list(compress(range(n), s))
    if p is not None:
        _fill(p, found, "p")
    return len(found)


def prime_list(n: int) -> list[int]:
    """All primes below n."""
    return list(compress(range(max(int(n), 0)), _eratosthenes(max(int(n), 0))))


def prime_flags(n: int) -> bytearray:
    """0/1 primality flags for [0, n)."""
    return _eratosthenes(max(int(n), 0))


def prime_pi(pi: MutableSequence[int], n: int, p: Sequence[int], m: int) -> MutableSequence[int]:
    """pi[i] = number of primes ≤ i, for i < n. O(n)."""
    vals = [0] * n
    count = 0
    it = iter(islice(p, m))
    nxt = next(it, None)
    for i in range(n):
        if nxt is not None and nxt == i:
            count += 1
            nxt = next(it, None)
        vals[i] = count
    return _fill(pi, vals, "pi")


def euler_phi(phi: MutableSequence[int], n: int, p: Sequence[int], m: int) -> MutableSequence[int]:
    """phi[i] = φ(i) for i < n, from the primes p[:m] below n. O(n log log n)."""
    vals = list(range(n))
    for pr in islice(p, m):
        pr = int(pr)
        if pr >= n:
            break
        for j in range(pr, n, pr):
            vals[j] -= vals[j] // pr
    return _fill(phi, vals, "phi")


def moebius_mu(mu: MutableSequence[int], n: int, p: Sequence[int] | None = None, m: int = 0) -> MutableSequence[int]:
    """
    mu[i] = μ(i) for i < n: 0 unless i is a square-free positive integer,
    otherwise (-1)^(number of prime factors). Primes are sieved here when
    not supplied. O(n log log n).
    """
    if p is None:
        p = prime_list(n)
        m = len(p)
    vals = [1] * n
    if n > 0:
        vals[0] = 0
    for pr in islice(p, m):
        pr = int(pr)
        if pr >= n:
            break
        for j in range(pr, n, pr):
            vals[j] = -vals[j]
        sq = pr * pr
        for j in range(sq, n, sq):
            vals[j] = 0
    return _fill(mu, vals, "mu")


def divisor_sigma0(ds0: MutableSequence[int], n: int) -> MutableSequence[int]:
    """ds0[i] = number of divisors of i, for i < n (ds0[0] = 0). O(n log n)."""
    vals = [0] * n
    for d in range(1, n):
        for j in range(d, n, d):
            vals[j] += 1
    return _fill(ds0, vals, "ds0")


def divisor_sigma1(ds1: MutableSequence[int], n: int) -> MutableSequence[int]:
    """ds1[i] = sum of divisors of i, for i < n (ds1[0] = 0). O(n log n)."""
    vals = [0] * n
    for d in range(1, n):
        for j in range(d, n, d):
            vals[j] += d
    return _fill(ds1, vals, "ds1")


def factor(bpf: MutableSequence[int], n: int, p: Sequence[int], m: int) -> MutableSequence[int]:
    """
    bpf[i] = biggest prime factor of i, for i < n (bpf[0] = 0, bpf[1] = 1).
    Feed the result to factorization.factor_integer_to_map. O(n log log n).
    """
    vals = list(range(n))
    for pr in islice(p, m):
        pr = int(pr)
        if pr >= n:
            break
        # primes ascend, so the last write to each slot is the biggest factor
        vals[pr::pr] = [pr] * len(range(pr, n, pr))
    return _fill(bpf, vals, "bpf")


def segmented_q(q: MutableSequence[int], b: int, e: int, p: Sequence[int], m: int) -> MutableSequence[int]:
    """q[i - b] = 1 if i is prime, else 0, for i in [b, e). Needs primes up to √(e-1)."""
    size = max(e - b, 0)
    s = bytearray([1]) * size
    for i in range(b, min(e, 2)):
        s[i - b] = 0
    for pr in _small_primes(p, m, e):
        start = _first_multiple(pr, b, pr * pr)
        if start < e:
            s[start - b::pr] = bytes(len(range(start, e, pr)))
    return _fill(q, s, "q")


def segmented_phi(
    phi: MutableSequence[int],
    tmp: MutableSequence[int] | None,
    b: int,
    e: int,
    p: Sequence[int],
    m: int,
) -> MutableSequence[int]:
    """
    phi[i - b] = φ(i) for i in [b, e). Needs primes up to √(e-1).

    `tmp` is scratch space of the same size; it ends up holding the part of
    each i left after dividing out the small primes (1 or one big prime).
    Pass None to let the function allocate it.
    """
    size = max(e - b, 0)
    vals = list(range(b, b + size))
    rest = list(vals)
    for pr in _small_primes(p, m, e):
        for j in range(_first_multiple(pr, b, pr), e, pr):
            k = j - b
            vals[k] -= vals[k] // pr
            r = rest[k]
            while r % pr == 0:
                r //= pr
            rest[k] = r
    for k in range(size):
        if rest[k] > 1:
            vals[k] -= vals[k] // rest[k]
    if tmp is not None:
        _fill(tmp, rest, "tmp")
    return _fill(phi, vals, "phi")


def segmented_mu(mu: MutableSequence[int], b: int, e: int, p: Sequence[int], m: int) -> MutableSequence[int]:
    """mu[i - b] = μ(i) for i in [b, e). Needs primes up to √(e-1)."""
    size = max(e - b, 0)
    vals = [1] * size
    prod = [1] * size
    for pr in _small_primes(p, m, e):
        for j in range(_first_multiple(pr, b, pr), e, pr):
            vals[j - b] = -vals[j - b]
            prod[j - b] *= pr
        sq = pr * pr
        for j in range(_first_multiple(sq, b, sq), e, sq):
            vals[j - b] = 0
    for k in range(size):
        v = b + k
        if v == 0:
            vals[k] = 0
        elif prod[k] != v:
            # exactly one prime factor above √e is left
            vals[k] = -vals[k]
    return _fill(mu, vals, "mu")


class PrimeHolder:
    """
    Lazily-built prime tables for [0, size): prime list, primality flags and
    biggest-prime-factor table. Values at or above `size` fall back to
    Miller-Rabin and Pollard's Rho.
    """

    def __init__(self, size: int):
        self.size = max(int(size), 2)
        self._primes: list[int] | None = None
        self._flags: bytearray | None = None
        self._bpf: list[int] | None = None

    def flags(self) -> bytearray:
        if self._flags is None:
            self._flags = prime_flags(self.size)
        return self._flags

    def primes(self) -> list[int]:
        if self._primes is None:
            self._primes = list(compress(range(self.size), self.flags()))
        return self._primes

    def bpf(self) -> list[int]:
        if self._bpf is None:
            ps = self.primes()
            self._bpf = factor([0] * self.size, self.size, ps, len(ps))
        return self._bpf

    def is_prime(self, k: int) -> bool:
        if 0 <= k < self.size:
            return bool(self.flags()[k])
        return is_probable_prime(k)

    def factor_integer(self, k: int) -> Factorization:
        """Sorted factorization of k."""
        if 0 <= k < self.size:
            return factor_integer_table(k, self.bpf())
        return factor_integer(k).sorted()
