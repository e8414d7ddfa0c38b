from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ntalgo.fmt import format_factorization


@dataclass(frozen=True)
class Factorization:
    """
    Prime-power factorization n = Π p^e as an ordered tuple of (p, e) pairs.

    Pair order is whatever the producer gives: discovery order from
    factor_integer, strictly increasing from the trial-division and
    table-driven variants. Use .sorted() when order matters.

    `unfactored` lists composites the Pollard's Rho budget could not split;
    each of them also appears in `pairs` with exponent 1.
    """
    n: int
    pairs: tuple[tuple[int, int], ...] = ()
    unfactored: tuple[int, ...] = ()

    @property
    def incomplete(self) -> bool:
        return bool(self.unfactored)

    @property
    def primes(self) -> list[int]:
        return [p for p, _ in self.pairs]

    @property
    def exponents(self) -> list[int]:
        return [e for _, e in self.pairs]

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __getitem__(self, i: int) -> tuple[int, int]:
        return self.pairs[i]

    def sorted(self) -> Factorization:
        return Factorization(self.n, tuple(sorted(self.pairs)), self.unfactored)

    def as_dict(self) -> dict[int, int]:
        out: dict[int, int] = {}
        for p, e in sorted(self.pairs):
            out[p] = out.get(p, 0) + e
        return out

    def value(self) -> int:
        v = 1
        for p, e in self.pairs:
            v *= p ** e
        return v

    def __str__(self) -> str:
        return format_factorization(self)
