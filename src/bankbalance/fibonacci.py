# -----------------------------------------------------------------------------
#  fibonacci.py
#  Fibonacci table used by the deposit search
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache


@lru_cache(maxsize=1024)
def fib_upto(n: int) -> tuple[int, ...]:
    """
    Return Fibonacci numbers (F0, F1, ...) up to the largest <= n.
    F0=0, F1=1. Assumes n >= 0 (validated by the caller).
    """
    if n == 0:
        return (0,)
    out = [0, 1]
    while out[-1] <= n:
        out.append(out[-1] + out[-2])
    # the loop always overshoots by exactly one term
    out.pop()
    return tuple(out)


def fib(n: int) -> int:
    """F(n) by fast doubling (n >= 0)."""
    if n < 0:
        raise ValueError("fib requires n >= 0")

    def _pair(k: int) -> tuple[int, int]:
        # (F(k), F(k+1))
        if k == 0:
            return 0, 1
        a, b = _pair(k >> 1)
        c = a * (2 * b - a)
        d = a * a + b * b
        return (d, c + d) if k & 1 else (c, d)

    return _pair(n)[0]
