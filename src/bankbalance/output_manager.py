# output_manager.py

import os

from bankbalance.fmt import strip_ansi


def resolve_output_path(path: str) -> str:
    """
    Resolve user-provided output path.

    Rules:
    - '~' expanded to user home
    - Absolute paths unchanged
    - Relative paths are relative to the current directory
    """
    if not path:
        raise ValueError("Output path is empty")
    path = os.path.expanduser(path)
    return os.path.normpath(os.path.abspath(path))


class OutputManager:
    """
    Handles all printing/output, to screen and/or an append-only file.

    Usage:
        om = OutputManager(output_file="results/all.txt")
        om.write("days: 18")   # prints and appends to the file
        om.close()             # blank line between runs
    """

    def __init__(self, output_file: str | None = None, quiet: bool = False):
        """
        Parameters:
            output_file:
                None or ""       => screen only
                path/to/file.txt => append all runs to this file
            quiet: if True, no output to screen (only to file)
        """
        self.quiet = quiet
        self.output_file = output_file or ""
        self._buffer: list[str] = []
        self._path: str | None = None

        if self.output_file:
            path = resolve_output_path(self.output_file)
            if os.path.isdir(path):
                raise ValueError(f"Output path is a directory: {path}")
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            # fail before anything is printed if the file cannot be appended to
            with open(path, "a", encoding="utf-8"):
                pass
            self._path = path

    @property
    def path(self) -> str | None:
        return self._path

    def write(self, text: str = "", end: str = "\n") -> None:
        """Write to screen and file (if configured)."""
        text = text + end
        self._buffer.append(text)

        if not self.quiet:
            print(text, end="")

        if self._path:
            with open(self._path, "a", encoding="utf-8") as fh:
                fh.write(strip_ansi(text))

    def close(self) -> None:
        """Add a separator line between runs in the output file."""
        if self._path and self._buffer:
            with open(self._path, "a", encoding="utf-8") as fh:
                fh.write("\n")

    def __enter__(self) -> "OutputManager":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
