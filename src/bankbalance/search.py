# -----------------------------------------------------------------------------
#  search.py
#  Deepest-day search for the Fibonacci deposit puzzle
# -----------------------------------------------------------------------------
"""
Deposit `a` on day 1 and `b` on day 2; every later day is the sum of the two
previous days:

    day 1: 1a
    day 2:      1b
    day 3: 1a + 1b
    day 4: 1a + 2b
    day 5: 2a + 3b
    day 6: 3a + 5b

The coefficients are Fibonacci numbers, with the `a` sequence one step behind
the `b` sequence. A target is therefore reached when

    target = a*F(k) + b*F(k+1)

and we want the largest k for which non-negative integers a, b exist.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import gmpy2

from bankbalance.fibonacci import fib, fib_upto
from bankbalance.runtime import CFG
from bankbalance.utility import UserInputError

STRATEGIES = ("inverse", "scan")
DEFAULT_STRATEGY = "inverse"


@dataclass(frozen=True)
class Solution:
    days: int                    # day count as reported to the user
    first_deposit: int
    second_deposit: int
    index: int                   # k in target = a*F(k) + b*F(k+1)
    exact_fibonacci: bool = False


def resolve_strategy(name: str | None = None) -> str:
    """Explicit name, else SEARCH.STRATEGY from the active profile."""
    if name is None:
        name = CFG("SEARCH.STRATEGY", DEFAULT_STRATEGY)
    key = str(name).strip().lower()
    if key not in STRATEGIES:
        raise UserInputError(
            f"Unknown search strategy '{name}' (choose from: {', '.join(STRATEGIES)})."
        )
    return key


# --- smallest first deposit for one day index ---


def _first_deposit_scan(target: int, fib1: int, fib2: int) -> int | None:
    """Try i = 0, 1, 2, ... while i*fib1 <= target."""
    # fib1 == 0 leaves the remainder constant: a single check decides
    stop = 1 if fib1 == 0 else target // fib1 + 1
    for i in range(stop):
        if (target - i * fib1) % fib2 == 0:
            return i
    return None


def _first_deposit_inverse(target: int, fib1: int, fib2: int) -> int | None:
    """
    Same answer as the scan: the smallest i >= 0 with
    target - i*fib1 ≡ 0 (mod fib2) is target * fib1⁻¹ mod fib2.
    Consecutive Fibonacci numbers are coprime, so the inverse exists.
    """
    if fib2 == 1:
        return 0
    if fib1 == 0:
        return 0 if target % fib2 == 0 else None
    i = int(gmpy2.f_mod(gmpy2.mpz(target) * gmpy2.invert(fib1, fib2), fib2))
    return i if i * fib1 <= target else None


_FINDERS = {
    "scan": _first_deposit_scan,
    "inverse": _first_deposit_inverse,
}


def scan_day_indices(
    target: int,
    fibs: Sequence[int],
    indices: Iterable[int],
    *,
    strategy: str | None = None,
) -> Solution | None:
    """
    General search over the given day indices, in the order given.
    For each index pairs fib1=F[index] (day-1 coefficient) with
    fib2=F[index+1] (day-2 coefficient); the first hit wins.
    """
    find = _FINDERS[resolve_strategy(strategy)]
    for index in indices:
        fib1 = fibs[index]
        fib2 = fibs[index + 1]
        i = find(target, fib1, fib2)
        if i is not None:
            j = (target - i * fib1) // fib2
            return Solution(days=index, first_deposit=i, second_deposit=j, index=index)
    return None


def deepest_day_search(
    target: int,
    *,
    strategy: str | None = None,
    fibs: Sequence[int] | None = None,
) -> Solution | None:
    """
    Return the solution reaching `target` on the latest possible day, with the
    smallest first deposit among solutions on that day. None if no exact
    solution exists (does not happen for target >= 0).
    """
    if target < 0:
        raise ValueError("target must be >= 0")
    if fibs is None:
        fibs = fib_upto(target)

    # The general search pairs F[k] with F[k+1] and never uses F[-1] as the
    # day-1 coefficient, so a target that is itself a Fibonacci number needs
    # its own case: a=1, b=0.
    if fibs[-1] == target:
        return Solution(
            days=len(fibs),
            first_deposit=1,
            second_deposit=0,
            index=len(fibs) - 1,
            exact_fibonacci=True,
        )

    return scan_day_indices(target, fibs, range(len(fibs) - 2, -1, -1), strategy=strategy)


def verify_solution(target: int, solution: Solution) -> bool:
    """a, b >= 0 and a*F(index) + b*F(index+1) == target."""
    a, b, k = solution.first_deposit, solution.second_deposit, solution.index
    if a < 0 or b < 0 or k < 0:
        return False
    return a * fib(k) + b * fib(k + 1) == target


def deposit_sequence(solution: Solution) -> list[int]:
    """
    Day-by-day values a, b, a+b, a+2b, ... up to the day the target is hit.
    The last element equals a*F(index) + b*F(index+1).
    """
    a, b = solution.first_deposit, solution.second_deposit
    seq = [a, b]
    # day n (n >= 2) holds a*F(n-2) + b*F(n-1)
    for _ in range(solution.index):
        seq.append(seq[-1] + seq[-2])
    return seq
