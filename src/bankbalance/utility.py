# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

from bankbalance.runtime import CFG

INT64_MAX = 2**63 - 1

# digit groups separated by spaces/commas/underscores & NBSP variants
_SEP_CLASS = r"[ ,_\u00A0\u2009\u202F]"
_GROUPED_RE = re.compile(rf"^[+-]?\d{{1,3}}(?:{_SEP_CLASS}\d{{3}})+$")
_PLAIN_RE = re.compile(r"^[+-]?\d+$")


class UserInputError(Exception):
    pass


class UsageError(UserInputError):
    """Wrong number of command line arguments."""


class ParseError(UserInputError):
    """Target sum is not a valid non-negative integer in range."""


def max_target() -> int:
    """Largest accepted target sum (profile BEHAVIOUR.MAX_TARGET)."""
    try:
        limit = int(CFG("BEHAVIOUR.MAX_TARGET", INT64_MAX))
    except (TypeError, ValueError):
        raise UserInputError("BEHAVIOUR.MAX_TARGET must be an integer.") from None
    if limit < 0:
        raise UserInputError("BEHAVIOUR.MAX_TARGET must be >= 0.")
    return limit


def parse_target_sum(text: str, *, limit: int | None = None) -> int:
    """
    Parse the target sum from a command line token.

    Accepts plain integers ("1000000") and grouped digits
    ("1_000_000", "1,000,000", "1 000 000"). Rejects anything else,
    negative values and values above `limit` (default: max_target()).
    """
    s = (text or "").strip()
    if not s:
        raise ParseError("Invalid input: empty target sum.")

    if _GROUPED_RE.match(s):
        s = re.sub(_SEP_CLASS, "", s)
    elif not _PLAIN_RE.match(s):
        raise ParseError(f"Invalid input: '{text}' is not an integer.")

    n = int(s)
    if n < 0:
        raise ParseError(f"Invalid input: target sum must be >= 0 (got {n}).")

    lim = max_target() if limit is None else limit
    if n > lim:
        raise ParseError(f"Invalid input: target sum {n} is out of range (max {lim}).")
    return n


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
