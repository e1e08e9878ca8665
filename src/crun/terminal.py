"""Launch a compiled program in a new terminal window."""

from __future__ import annotations

import shlex
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path

from crun.errors import TerminalLaunchError
from crun.locator import command_exists

LINUX_TERMINALS = (
    "gnome-terminal",
    "konsole",
    "xterm",
    "lxterminal",
    "xfce4-terminal",
    "mate-terminal",
    "terminator",
    "tilix",
    "alacritty",
    "kitty",
    "urxvt",
)

# These take the command after "--"; the rest use "-e".
_DASH_DASH_TERMINALS = frozenset({
    "gnome-terminal", "xfce4-terminal", "lxterminal",
    "mate-terminal", "terminator", "tilix",
})

_PAUSE = "echo; echo Press Enter to exit...; read -n 1"


def _shell_line(binary: str, args: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in (binary, *args))


def find_terminal(search_path: str | None = None) -> str | None:
    for term in LINUX_TERMINALS:
        if command_exists(term, search_path=search_path):
            return term
    return None


def _windows_batch(binary: str, args: Sequence[str]) -> Path:
    quoted = " ".join(f'"{part}"' for part in (binary, *args))
    script = Path(tempfile.gettempdir()) / "crun_launch_terminal.bat"
    script.write_text(
        "@echo off\n"
        f'start "" cmd /c "{quoted} & echo Press any key to exit... & pause > nul"\n'
    )
    return script


def terminal_command(
    binary: str,
    args: Sequence[str] = (),
    *,
    platform: str | None = None,
    search_path: str | None = None,
) -> list[str]:
    """Return the command that opens a terminal running *binary*."""
    platform = platform or sys.platform

    if platform.startswith("win"):
        return ["cmd.exe", "/C", str(_windows_batch(binary, args))]

    line = f"{_shell_line(binary, args)}; {_PAUSE}"

    if platform == "darwin":
        script = (
            'tell application "Terminal"\n'
            "activate\n"
            f"do script {_applescript_string(line)}\n"
            "end tell"
        )
        return ["osascript", "-e", script]

    term = find_terminal(search_path)
    if term is None:
        raise TerminalLaunchError("No supported terminal emulator found")
    flag = "--" if term in _DASH_DASH_TERMINALS else "-e"
    return [term, flag, "bash", "-c", line]


def _applescript_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def launch_in_terminal(
    binary: str,
    args: Sequence[str] = (),
    *,
    platform: str | None = None,
) -> None:
    """Open a new terminal running *binary*; does not wait for it."""
    command = terminal_command(binary, args, platform=platform)
    try:
        subprocess.Popen(command)
    except OSError as e:
        raise TerminalLaunchError(f"Failed to launch {command[0]}: {e}") from e
