from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("ntalgo")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .arith import fraction_reduce
from .config import load_settings
from .context import Factorization
from .crt import chinese_remainder, chinese_remainder_all, garner, mixed_radix_value
from .factorization import (
    factor_integer,
    factor_integer_slow,
    factor_integer_table,
    factor_integer_to_map,
    factor_out,
    pollard_rho,
    pollard_rho_repeated,
)
from .modular import binomial_mod_p, factorial_mod_p, jacobi
from .primality import is_probable_prime, miller_rabin
from .roots import (
    kth_roots,
    kth_roots_of,
    kth_roots_of_unity,
    primitive_root,
    primitive_root_of,
    sqrt_cipolla,
    sqrt_hensel_lift,
)
from .runtime import APPLY, CFG
from .sieve import PrimeHolder
from .utility import UserInputError, integer_digits, integer_string

__all__ = [
    "APPLY",
    "CFG",
    "Factorization",
    "PrimeHolder",
    "UserInputError",
    "__version__",
    "binomial_mod_p",
    "chinese_remainder",
    "chinese_remainder_all",
    "factor_integer",
    "factor_integer_slow",
    "factor_integer_table",
    "factor_integer_to_map",
    "factor_out",
    "factorial_mod_p",
    "fraction_reduce",
    "garner",
    "integer_digits",
    "integer_string",
    "is_probable_prime",
    "jacobi",
    "kth_roots",
    "kth_roots_of",
    "kth_roots_of_unity",
    "load_settings",
    "miller_rabin",
    "mixed_radix_value",
    "pollard_rho",
    "pollard_rho_repeated",
    "primitive_root",
    "primitive_root_of",
    "sqrt_cipolla",
    "sqrt_hensel_lift",
]
