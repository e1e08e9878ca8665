"""Where binaries are built and whether they must be rebuilt.

The rebuild decision only compares modification times of the source and
the binary. Changing the extra flags or the compiler alone does not
trigger a rebuild; ``--recompile`` forces one.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from crun.compilers import Language
from crun.errors import BuildDirError, SourceNotFoundError

CACHE_DIR_NAME = ".crun"

_SOURCE_EXTENSIONS = (*Language.C.extensions, *Language.CPP.extensions)


def modification_time(path: str | Path) -> int | None:
    """Modification time in nanoseconds, or None if it cannot be read."""
    try:
        return os.stat(path).st_mtime_ns
    except OSError:
        return None


def needs_rebuild(source: str | Path, output: str | Path, *, force: bool = False) -> bool:
    """Return True unless *output* is at least as new as *source*."""
    if force:
        return True
    output_time = modification_time(output)
    source_time = modification_time(source)
    if output_time is None or source_time is None:
        return True
    return source_time > output_time


def build_dir(root: Path | None = None) -> Path:
    return (root or Path.cwd()) / CACHE_DIR_NAME


def binary_name(source: Path) -> str:
    """Default binary name for *source*: its stem plus a short path digest.

    Sources with the same stem in different directories, or with different
    extensions, get different binaries.
    """
    resolved = source.resolve()
    digest = hashlib.blake2b(str(resolved).encode("utf-8"), digest_size=4)
    return f"{resolved.stem}-{digest.hexdigest()}"


def prepare_output(
    source: Path,
    directory: Path,
    name: str | None = None,
    *,
    windows: bool | None = None,
) -> Path:
    """Create *directory* if needed and return the binary path for *source*."""
    if windows is None:
        windows = os.name == "nt"
    binary = name or binary_name(source)
    if windows and not binary.endswith(".exe"):
        binary += ".exe"

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BuildDirError(directory, e.strerror or str(e)) from e

    return directory / binary


def find_source(name: str) -> Path:
    """Locate the source file for *name*.

    A name with an extension must exist as given. A bare name is tried
    with each C/C++ source extension in turn.
    """
    path = Path(name)
    if not path.name:
        raise SourceNotFoundError(name)
    if path.suffix:
        if path.is_file():
            return path
        raise SourceNotFoundError(name)

    for ext in _SOURCE_EXTENSIONS:
        candidate = path.with_name(path.name + ext)
        if candidate.is_file():
            return candidate
    raise SourceNotFoundError(name)
