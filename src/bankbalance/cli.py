# src/bankbalance/cli.py

"""
Bank Balance - Fibonacci deposit puzzle

Description:
    Deposit a on day 1 and b on day 2; every later day is the sum of the two
    previous days. For a target sum, find the deposits that reach the target
    exactly on the latest possible day (smallest first deposit on ties).

usage: bankbalance <target_sum>
"""

from __future__ import annotations

import argparse
import sys
import time

from colorama import Fore, Style
from colorama import init as colorama_init

from bankbalance import __version__ as _ver
from bankbalance.config import load_settings
from bankbalance.fibonacci import fib_upto
from bankbalance.fmt import format_no_solution, format_progression, format_solution
from bankbalance.output_manager import OutputManager
from bankbalance.runtime import APPLY, CFG, ensure_runtime_deps
from bankbalance.runtime import current as _rt_current
from bankbalance.search import STRATEGIES, deepest_day_search, deposit_sequence, resolve_strategy
from bankbalance.utility import (
    UsageError,
    UserInputError,
    flatten_dotted,
    parse_target_sum,
    typename,
)

PROG = "bankbalance"


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if msg.startswith("Invalid input:"):
        msg = msg.replace("Invalid input:", f"{Fore.RED}Invalid input:{Style.RESET_ALL}", 1)
    elif not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"[debug] {msg}", file=sys.stderr)


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=PROG,
        description="Fibonacci bank balance: reach a target sum as slowly as possible",
        usage=f"{PROG} [--config FILE] [--strategy NAME] [--show-days] [--output FILE] [--quiet] [--debug] <target_sum>",
    )
    p.add_argument("items", nargs="*", metavar="target_sum",
                   help="non-negative integer the balance must reach exactly")
    p.add_argument("--config", default=None, help="TOML profile to use instead of the packaged default")
    p.add_argument("--strategy", choices=STRATEGIES, default=None,
                   help="search strategy (default: SEARCH.STRATEGY from the profile)")
    p.add_argument("--show-days", action="store_true", default=None,
                   help="also print the balance for every day")
    p.add_argument("--output", default=None, help="Append results to a file (also prints unless --quiet)")
    p.add_argument("--quiet", action="store_true", help="Suppress screen output")
    p.add_argument("--debug", action="store_true", help="Show timings and internal trace info on stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return 1
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if _rt_current().debug or "--debug" in (argv if argv is not None else sys.argv):
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _debug_settings(settings) -> None:
    if not _rt_current().debug:
        return
    _debug(f"active profile: {settings.name} ({settings.description})")
    if settings._source:
        _debug(f"profile file: {settings._source}")
    flat = flatten_dotted(settings.as_dict())
    for k in sorted(flat.keys(), key=str.lower):
        v = CFG(k, None)
        print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)


# ---- main ----
def _main_impl(argv=None) -> int:

    # no autoreset: stdout must stay byte-exact on a terminal
    colorama_init()

    parser = _build_parser()
    args = parser.parse_args(argv)

    if len(args.items) != 1:
        raise UsageError(f"Usage: {PROG} <target_sum>")

    if not ensure_runtime_deps(strict=True):
        return 1

    settings = load_settings(args.config)
    APPLY(settings)
    rt = _rt_current()
    if args.debug:
        rt.debug = True

    _debug_settings(settings)

    target = parse_target_sum(args.items[0])
    strategy = resolve_strategy(args.strategy)
    show_days = args.show_days if args.show_days is not None else bool(CFG("OUTPUT.SHOW_PROGRESSION", False))

    t0 = time.perf_counter()
    fibs = fib_upto(target)
    solution = deepest_day_search(target, strategy=strategy, fibs=fibs)
    elapsed = time.perf_counter() - t0

    _debug(f"target: {target}")
    _debug(f"fibonacci table: {len(fibs)} term(s), largest {fibs[-1]}")
    _debug(f"strategy: {strategy}")
    if solution is not None:
        _debug(f"solution index: {solution.index} (exact fibonacci: {solution.exact_fibonacci})")
    _debug(f"search time: {elapsed * 1000:.3f} ms")

    output_file = args.output if args.output is not None else (CFG("OUTPUT.OUTPUT_FILE", "") or None)
    try:
        om = OutputManager(output_file=output_file, quiet=args.quiet)
    except (OSError, ValueError) as e:
        raise UserInputError(f"--output: {e}") from None
    if om.path:
        _debug(f"output file: {om.path}")

    with om:
        if solution is None:
            om.write(format_no_solution(), end="")
            return 0
        om.write(format_solution(solution), end="")
        if show_days:
            om.write(format_progression(deposit_sequence(solution)), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
