from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("bankbalance")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import load_settings
from .fibonacci import fib, fib_upto
from .runtime import APPLY, CFG
from .search import Solution, deepest_day_search, deposit_sequence, verify_solution
from .utility import ParseError, UsageError, UserInputError, parse_target_sum

__all__ = [
    "APPLY",
    "CFG",
    "ParseError",
    "Solution",
    "UsageError",
    "UserInputError",
    "__version__",
    "deepest_day_search",
    "deposit_sequence",
    "fib",
    "fib_upto",
    "load_settings",
    "parse_target_sum",
    "verify_solution",
]
