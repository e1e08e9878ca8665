"""Shared test helpers for the crun test suite."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

# A compiler that understands "-o OUT", logs its arguments next to itself
# and writes a shell script as the "binary".
_COMPILER_SCRIPT = """\
#!/bin/sh
PATH=/usr/bin:/bin
echo "$@" >> "$0.log"
out=""
while [ $# -gt 0 ]; do
    case "$1" in
        -o) shift; out="$1" ;;
    esac
    shift
done
[ -n "$out" ] || exit 2
printf '#!/bin/sh\\nexit {status}\\n' > "$out"
chmod +x "$out"
"""

_BROKEN_SCRIPT = """\
#!/bin/sh
exit 1
"""

posix_only = pytest.mark.skipif(os.name == "nt", reason="uses POSIX shell scripts")


def make_executable(path: Path, text: str = "#!/bin/sh\nexit 0\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def make_plain(path: Path) -> Path:
    """A regular file with every execute bit cleared."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("not a program\n")
    path.chmod(0o644)
    return path


class FakeToolchain:
    """A private bin directory that is the whole PATH for the test."""

    def __init__(self, bin_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        self.bin_dir = bin_dir
        bin_dir.mkdir(parents=True, exist_ok=True)
        monkeypatch.setenv("PATH", str(bin_dir))

    @property
    def search_path(self) -> str:
        return str(self.bin_dir)

    def add(self, name: str, *, works: bool = True, exit_status: int = 0) -> Path:
        """Install a fake compiler.

        *works* False makes every compilation fail; *exit_status* is what
        the produced binaries exit with.
        """
        if not works:
            return make_executable(self.bin_dir / name, _BROKEN_SCRIPT)
        return make_executable(
            self.bin_dir / name, _COMPILER_SCRIPT.format(status=exit_status),
        )

    def calls(self, name: str) -> list[str]:
        log = self.bin_dir / f"{name}.log"
        if not log.exists():
            return []
        return log.read_text().splitlines()
