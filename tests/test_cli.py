# tests/test_cli.py
"""
Command line behaviour: output contract, exit codes, options.

Run: pytest -v
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

import bankbalance.runtime
from bankbalance.cli import main
from bankbalance.fmt import format_no_solution

ONE_MILLION = "days: 18\nfirst deposit:  154\nsecond deposit: 144\n"


# ---------- output contract ---------------------------------------------------


@pytest.mark.parametrize(
    ("arg", "expected"),
    [
        ("1000000", ONE_MILLION),
        ("1_000_000", ONE_MILLION),
        ("1,000,000", ONE_MILLION),
        ("55", "days: 11\nfirst deposit:  1\nsecond deposit: 0\n"),
        ("0", "days: 1\nfirst deposit:  1\nsecond deposit: 0\n"),
        ("7", "days: 3\nfirst deposit:  2\nsecond deposit: 1\n"),
    ],
)
def test_success_output(capsys, arg, expected):
    assert main([arg]) == 0
    out, err = capsys.readouterr()
    assert out == expected
    assert err == ""


def test_scan_strategy_same_output(capsys):
    assert main(["--strategy", "scan", "1000000"]) == 0
    assert capsys.readouterr().out == ONE_MILLION


def test_repeated_runs_identical(capsys):
    main(["123456789"])
    first = capsys.readouterr().out
    main(["123456789"])
    assert capsys.readouterr().out == first


# ---------- errors ------------------------------------------------------------


@pytest.mark.parametrize("argv", [[], ["1", "2"], ["10", "20", "30"]])
def test_wrong_argument_count(capsys, argv):
    assert main(argv) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert "Usage: bankbalance <target_sum>" in err


@pytest.mark.parametrize("arg", ["abc", "1.5", "1e6", "-5", "9223372036854775808", ""])
def test_invalid_target(capsys, arg):
    assert main([arg]) == 2
    out, err = capsys.readouterr()
    assert out == ""
    assert "Invalid input" in err


def test_int64_max_accepted(capsys):
    assert main(["9223372036854775807"]) == 0
    assert capsys.readouterr().out.startswith("days: ")


def test_unknown_strategy_in_profile(tmp_path, capsys):
    prof = tmp_path / "bad.toml"
    prof.write_text('[SEARCH]\nSTRATEGY = "guess"\n', encoding="utf-8")
    assert main(["--config", str(prof), "10"]) == 2
    assert "Unknown search strategy" in capsys.readouterr().err


def test_missing_profile(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "nope.toml"), "10"]) == 2
    assert "Profile file not found" in capsys.readouterr().err


# ---------- options -----------------------------------------------------------


def test_show_days(capsys):
    assert main(["--show-days", "1000000"]) == 0
    out = capsys.readouterr().out
    assert out.startswith(ONE_MILLION)
    lines = out[len(ONE_MILLION):].splitlines()
    assert lines[0] == "day  1: 154"
    assert lines[1] == "day  2: 144"
    assert lines[-1] == "day 20: 1000000"
    assert len(lines) == 20


def test_show_days_from_profile(tmp_path, capsys):
    prof = tmp_path / "days.toml"
    prof.write_text("[OUTPUT]\nSHOW_PROGRESSION = true\n", encoding="utf-8")
    assert main(["--config", str(prof), "7"]) == 0
    out = capsys.readouterr().out
    assert out.endswith("day 1: 2\nday 2: 1\nday 3: 3\nday 4: 4\nday 5: 7\n")


def test_output_file_appends(tmp_path, capsys):
    target = tmp_path / "runs" / "results.txt"
    assert main(["--output", str(target), "1000000"]) == 0
    assert main(["--output", str(target), "55"]) == 0
    assert capsys.readouterr().out.startswith(ONE_MILLION)
    text = target.read_text(encoding="utf-8")
    assert text == ONE_MILLION + "\n" + "days: 11\nfirst deposit:  1\nsecond deposit: 0\n" + "\n"


def test_quiet_writes_file_only(tmp_path, capsys):
    target = tmp_path / "quiet.txt"
    assert main(["--quiet", "--output", str(target), "1000000"]) == 0
    assert capsys.readouterr().out == ""
    assert target.read_text(encoding="utf-8").startswith(ONE_MILLION)


def test_debug_goes_to_stderr(capsys):
    assert main(["--debug", "1000000"]) == 0
    out, err = capsys.readouterr()
    assert out == ONE_MILLION
    assert "[debug] strategy: inverse" in err
    assert "[debug] fibonacci table: 31 term(s), largest 832040" in err
    assert "SEARCH.STRATEGY" in err


def test_no_solution_output(monkeypatch, capsys):
    monkeypatch.setattr("bankbalance.cli.deepest_day_search", lambda *a, **kw: None)
    assert main(["10"]) == 0
    out, err = capsys.readouterr()
    assert out == "No solution found.\n"
    assert err == ""


def test_format_no_solution():
    assert format_no_solution() == "No solution found.\n"


# ---------- runtime deps ------------------------------------------------------


def test_missing_gmpy2_reported(monkeypatch, capsys):
    monkeypatch.setattr(bankbalance.runtime, "find_spec", lambda name: None)
    assert main(["10"]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert "Missing dependencies" in err
    assert "pip install gmpy2" in err


# ---------- output file errors ------------------------------------------------


def test_unwritable_output_fails_before_printing(tmp_path, capsys):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    assert main(["--output", str(blocker / "results.txt"), "1000000"]) == 2
    out, err = capsys.readouterr()
    assert out == ""
    assert "--output" in err


def test_output_directory_rejected(tmp_path, capsys):
    assert main(["--output", str(tmp_path), "7"]) == 2
    assert capsys.readouterr().out == ""


# ---------- terminal output ---------------------------------------------------


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="needs a POSIX pty")
def test_terminal_stdout_has_no_escape_codes():
    import pty

    master, slave = pty.openpty()
    src = str(Path(__file__).resolve().parents[1] / "src")
    env = {**os.environ, "PYTHONPATH": src + os.pathsep + os.environ.get("PYTHONPATH", "")}
    proc = subprocess.Popen(
        [sys.executable, "-m", "bankbalance.cli", "7"],
        stdout=slave,
        stderr=subprocess.PIPE,
        env=env,
    )
    os.close(slave)
    chunks = []
    while True:
        try:
            chunk = os.read(master, 1024)
        except OSError:
            break
        if not chunk:
            break
        chunks.append(chunk)
    os.close(master)
    assert proc.wait(timeout=60) == 0
    proc.stderr.close()

    data = b"".join(chunks)
    assert b"\x1b" not in data
    assert data.replace(b"\r\n", b"\n") == b"days: 3\nfirst deposit:  2\nsecond deposit: 1\n"
