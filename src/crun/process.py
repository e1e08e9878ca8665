"""Start compilers and compiled programs."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from crun.compilers import build_invocation
from crun.errors import CompilationFailed


def run_command(program: str, args: Sequence[str] = (), *, quiet: bool = False) -> bool:
    """Run *program* and wait for it. Returns True on exit status 0.

    The child inherits stdin/stdout/stderr unless *quiet*, in which case
    all three go to the null device. There is no timeout.
    """
    stream = subprocess.DEVNULL if quiet else None
    try:
        result = subprocess.run(
            [program, *args],
            stdin=stream,
            stdout=stream,
            stderr=stream,
        )
    except OSError:
        return False
    return result.returncode == 0


def compile_source(
    compiler: str,
    output: Path,
    source: Path,
    extra_flags: str = "",
    *,
    quiet: bool = False,
) -> Path:
    """Compile *source* into *output* with *compiler*.

    Returns the output path on success; raises CompilationFailed on failure.
    """
    invocation = build_invocation(compiler, output, source, extra_flags)
    if not run_command(invocation.program, invocation.args, quiet=quiet):
        raise CompilationFailed(compiler, source)
    return output
