# src/bankbalance/fmt.py
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bankbalance.search import Solution

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

NO_SOLUTION = "No solution found."


def strip_ansi(s: str) -> str:
    return ANSI_RE.sub("", s)


def format_solution(solution: Solution) -> str:
    """The three result lines, exactly as the command prints them."""
    return (
        f"days: {solution.days}\n"
        f"first deposit:  {solution.first_deposit}\n"
        f"second deposit: {solution.second_deposit}\n"
    )


def format_no_solution() -> str:
    return NO_SOLUTION + "\n"


def format_progression(sequence: Sequence[int]) -> str:
    """One 'day <n>: <value>' line per day, day numbers right-aligned."""
    if not sequence:
        return ""
    width = len(str(len(sequence)))
    return "".join(f"day {n:>{width}}: {v}\n" for n, v in enumerate(sequence, start=1))
