# tests/test_factorization.py
"""
Pollard's Rho, the factoring orchestrator and the table-driven variants.

Run: pytest -v tests/test_factorization.py
"""

from __future__ import annotations

import pytest
from colorama import Fore, Style
from sympy import factorint, isprime

from ntalgo.context import Factorization
from ntalgo.factorization import (
    factor_integer,
    factor_integer_slow,
    factor_integer_table,
    factor_integer_to_map,
    factor_out,
    pollard_rho,
    pollard_rho_repeated,
)
from ntalgo.fmt import format_factorization
from ntalgo.runtime import APPLY
from ntalgo.sieve import factor, prime_list

# ---------- helpers -----------------------------------------------------------


def _check_complete(n: int, fac: Factorization) -> None:
    assert not fac.incomplete
    assert fac.value() == n
    primes = fac.primes
    assert len(primes) == len(set(primes)), f"{n}: repeated prime in {fac.pairs}"
    assert all(isprime(p) for p in primes)
    assert all(e >= 1 for e in fac.exponents)


# ---------- pollard_rho -------------------------------------------------------


def test_pollard_rho_trivial_cases():
    assert pollard_rho(0) == 0
    assert pollard_rho(1) == 1
    assert pollard_rho(10) == 2
    assert pollard_rho(2**40) == 2


def test_pollard_rho_finds_factor():
    assert pollard_rho(8051, 2, 1) in (83, 97)


def test_pollard_rho_returns_n_on_prime_or_exhausted_budget():
    assert pollard_rho(101, 2, 1) == 101
    assert pollard_rho(8051, 2, 1, max_inner_iter=0) == 8051


def test_pollard_rho_repeated():
    assert pollard_rho_repeated(8051) in (83, 97)
    assert pollard_rho_repeated(2**64 + 1) in (274177, 67280421310721)
    # no attempts at all
    assert pollard_rho_repeated(8051, max_iter=1) == 8051


# ---------- factor_integer ----------------------------------------------------


def test_factor_integer_360():
    fac = factor_integer(360)
    assert set(fac) == {(2, 3), (3, 2), (5, 1)}
    assert fac.sorted().pairs == ((2, 3), (3, 2), (5, 1))
    assert fac.as_dict() == {2: 3, 3: 2, 5: 1}
    assert str(fac) == "2^3 × 3^2 × 5"


def test_factor_integer_round_trip_small():
    for n in range(2, 5000):
        _check_complete(n, factor_integer(n))


@pytest.mark.parametrize("n", [
    600_851_475_143,
    2**64 + 1,
    1_000_003 ** 3,
    1_000_000_007 * 998_244_353,
    2**10 * 3**7 * 1_000_003 ** 2,
    12_345_678_910_111_213,
])
def test_factor_integer_matches_sympy(n):
    fac = factor_integer(n)
    _check_complete(n, fac)
    assert fac.as_dict() == {int(p): e for p, e in factorint(n).items()}


def test_factor_integer_zero_one_negative():
    assert len(factor_integer(0)) == 0
    assert len(factor_integer(1)) == 0
    assert factor_integer(1).value() == 1
    with pytest.raises(ValueError):
        factor_integer(-12)


def test_factor_integer_prime_input():
    fac = factor_integer(2**61 - 1)
    assert fac.pairs == ((2**61 - 1, 1),)


def test_incomplete_factorization_is_flagged():
    fac = factor_integer(8051, max_iter=1)
    assert fac.pairs == ((8051, 1),)
    assert fac.unfactored == (8051,)
    assert fac.incomplete


def test_unsplit_bases_are_marked_in_text():
    assert str(factor_integer(8051, max_iter=1)) == "8051?"
    fac = Factorization(3 * 8051, ((8051, 1), (3, 1)), (8051,))
    assert str(fac) == "3 × 8051?"
    coloured = format_factorization(fac, color=True)
    assert f"{Fore.RED}8051?{Style.RESET_ALL}" in coloured
    assert coloured.startswith("3 × ")


def test_profile_budget_is_used():
    APPLY({"FACTORING": {"MAX_ITER": 1}})
    assert factor_integer(3 * 8051).incomplete
    APPLY({"FACTORING": {"MAX_ITER": 20}})
    assert not factor_integer(3 * 8051).incomplete


def test_slow_threshold_switches_to_trial_division():
    APPLY({"FACTORING": {"SLOW_THRESHOLD": 10**6}})
    assert factor_integer(360).pairs == ((2, 3), (3, 2), (5, 1))


def test_debug_traces_go_to_stderr(capsys):
    APPLY({"BEHAVIOUR": {"DEBUG": True}})
    factor_integer(8051, max_iter=1)
    err = capsys.readouterr().err
    assert "[factor] giving up on 8051" in err


# ---------- trial division and tables -----------------------------------------


def test_factor_integer_slow():
    assert factor_integer_slow(360).pairs == ((2, 3), (3, 2), (5, 1))
    assert factor_integer_slow(97).pairs == ((97, 1),)
    assert factor_integer_slow(1).pairs == ()
    for n in range(2, 2000):
        fac = factor_integer_slow(n)
        assert fac.pairs == factor_integer(n).sorted().pairs


def test_factor_integer_to_map_uses_bpf_table():
    n = 5000
    ps = prime_list(n)
    bpf = factor([0] * n, n, ps, len(ps))
    mf = factor_integer_to_map(360, bpf)
    assert list(mf.items()) == [(2, 3), (3, 2), (5, 1)]
    # accumulate into an existing map
    acc = {2: 1}
    factor_integer_to_map(12, bpf, acc)
    assert acc == {2: 3, 3: 1}
    for k in range(2, n):
        assert factor_integer_to_map(k, bpf) == factor_integer(k).as_dict()


def test_factor_integer_table_of_product():
    n = 100
    ps = prime_list(n)
    bpf = factor([0] * n, n, ps, len(ps))
    fac = factor_integer_table([12, 18], bpf)
    assert fac.n == 216
    assert fac.pairs == ((2, 3), (3, 3))
    assert factor_integer_table(97, bpf).pairs == ((97, 1),)


def test_factor_out():
    assert factor_out(360, 2) == 45
    assert factor_out(360, 3) == 40
    assert factor_out(7, 2) == 7
    with pytest.raises(ValueError):
        factor_out(10, 1)
