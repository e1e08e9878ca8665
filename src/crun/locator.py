"""Find executables on disk or on the search path.

Nothing is cached: installed toolchains and ``PATH`` may change between
calls and every lookup goes back to the filesystem.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

WINDOWS_EXTENSIONS = ("exe", "bat", "cmd", "com")


def _is_windows(windows: bool | None) -> bool:
    return os.name == "nt" if windows is None else windows


def _has_separator(name: str) -> bool:
    return "/" in name or "\\" in name or os.sep in name


def is_executable(path: str | Path, *, windows: bool | None = None) -> bool:
    """Return True if *path* is a regular file the host would execute.

    POSIX: any of the owner/group/other execute bits is set.
    Windows: the extension is one of ``WINDOWS_EXTENSIONS``.
    """
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return False
    if not stat.S_ISREG(st.st_mode):
        return False
    if _is_windows(windows):
        ext = Path(path).suffix.lstrip(".").lower()
        return ext in WINDOWS_EXTENSIONS
    return bool(st.st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def _candidates(path: Path, windows: bool) -> list[Path]:
    """The path itself, plus each executable extension appended on Windows."""
    found = [path]
    if windows and path.suffix.lstrip(".").lower() not in WINDOWS_EXTENSIONS:
        found.extend(path.with_name(f"{path.name}.{ext}") for ext in WINDOWS_EXTENSIONS)
    return found


def _search_dirs(search_path: str | None) -> list[str]:
    if search_path is None:
        search_path = os.environ.get("PATH", "")
    return [d for d in search_path.split(os.pathsep) if d]


def find_command(
    name: str,
    *,
    search_path: str | None = None,
    windows: bool | None = None,
) -> str | None:
    """Return the full path of executable *name*, or None.

    A *name* containing a path separator is only checked where it points.
    Otherwise every directory of *search_path* (default: ``PATH``) is
    tried in order and the first hit wins.
    """
    if not name:
        return None
    win = _is_windows(windows)

    if _has_separator(name):
        for candidate in _candidates(Path(name), win):
            if is_executable(candidate, windows=win):
                return str(candidate)
        return None

    for directory in _search_dirs(search_path):
        for candidate in _candidates(Path(directory) / name, win):
            if is_executable(candidate, windows=win):
                return str(candidate)
    return None


def command_exists(
    name: str,
    *,
    search_path: str | None = None,
    windows: bool | None = None,
) -> bool:
    return find_command(name, search_path=search_path, windows=windows) is not None
