"""Status output for a single crun invocation.

All user-facing text goes through ``click.echo``. A ``Console`` is created
once per command and handed to whatever needs to print; it remembers how
many status lines it wrote to stdout so they can be erased again before
the compiled program takes over the terminal.
"""

from __future__ import annotations

from enum import Enum

import click


class Severity(Enum):
    PASS = "pass"
    FAIL = "fail"
    CRITICAL = "critical"
    WARNING = "warning"
    ERROR = "error"


# ANSI color codes
_COLORS = {
    Severity.PASS: "\033[32m",       # green
    Severity.FAIL: "\033[31m",       # red
    Severity.CRITICAL: "\033[33m",   # yellow
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.ERROR: "\033[1;31m",    # bold red
}
_BOLD = "\033[1m"
_RESET = "\033[0m"
_CURSOR_UP = "\033[A"
_ERASE_LINE = "\033[2K"

_MARKS = {
    Severity.PASS: "✓",
    Severity.FAIL: "✗",
    Severity.CRITICAL: "-",
}


class Console:
    """Prints status lines and keeps count of them for ``clear``."""

    def __init__(self, *, color: bool = True, verbose: bool = False) -> None:
        self.color = color
        self.verbose = verbose
        self._count = 0

    def _c(self, code: str) -> str:
        return code if self.color else ""

    @property
    def line_count(self) -> int:
        return self._count

    def status(self, message: str) -> None:
        """Print a status line that ``clear`` may erase later."""
        click.echo(message)
        self._count += message.count("\n") + 1

    def detail(self, message: str) -> None:
        """Print a status line only in verbose mode."""
        if self.verbose:
            self.status(message)

    def heading(self, message: str) -> None:
        self.status(f"{self._c(_BOLD)}{message}{self._c(_RESET)}")

    def warn(self, message: str) -> None:
        color = _COLORS[Severity.WARNING]
        click.echo(f"{self._c(color)}warning{self._c(_RESET)}: {message}", err=True)

    def error(self, message: str) -> None:
        color = _COLORS[Severity.ERROR]
        click.echo(f"{self._c(color)}error{self._c(_RESET)}: {message}", err=True)

    def passed(self, message: str) -> None:
        self._mark(Severity.PASS, message)

    def failed(self, message: str) -> None:
        self._mark(Severity.FAIL, message)

    def critical(self, message: str) -> None:
        self._mark(Severity.CRITICAL, message)

    def _mark(self, severity: Severity, message: str) -> None:
        color = self._c(_COLORS[severity])
        reset = self._c(_RESET)
        mark = _MARKS[severity]
        # [-] is printed plain, only the message is colored
        if severity is Severity.CRITICAL:
            prefix = f"[{mark}]"
        else:
            prefix = f"[{color}{mark}{reset}]"
        self.status(f"{prefix} {color}{message}{reset}")

    def clear(self) -> None:
        """Erase every status line printed so far.

        Only possible on a color-capable terminal; otherwise the count is
        just reset.
        """
        if self._count and self.color:
            click.echo((_CURSOR_UP + _ERASE_LINE) * self._count, nl=False)
        self._count = 0
