# src/ntalgo/fmt.py
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from colorama import Fore, Style

from ntalgo.utility import dec_digits, factor_pairs


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if n == 0:
        return "0"
    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n
    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)
    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def format_factorization(fac: Any, *, color: bool = False) -> str:
    """
    Turn a factorization into a tidy string like: 2^3 × 3^2 × 5

    Bases the factoring loop could not split carry a "?" suffix, shown in red
    when color=True.
    """
    unfactored = set(getattr(fac, "unfactored", ()))
    parts: list[str] = []
    for p, e in sorted(factor_pairs(fac)):
        tok = f"{abbr_int_fast(p)}^{e}" if e > 1 else abbr_int_fast(p)
        if p in unfactored:
            tok = f"{tok}?"
            if color:
                tok = f"{Fore.RED}{tok}{Style.RESET_ALL}"
        parts.append(tok)
    return " × ".join(parts) if parts else "1"


def format_congruences(congruences: Iterable[tuple[int, int]]) -> str:
    """[(2, 3), (3, 5)] → 'x ≡ 2 (mod 3), x ≡ 3 (mod 5)'"""
    return ", ".join(f"x ≡ {a} (mod {m})" for a, m in congruences)
