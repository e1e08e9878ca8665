"""Pick the compiler for a source file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from crun.compilers import CPP_COMPILERS, Language, detect_language
from crun.errors import PreferredCompilerNotFound
from crun.locator import command_exists

if TYPE_CHECKING:
    from crun.console import Console


@dataclass(frozen=True)
class Resolution:
    """The compiler chosen for one build, or None if nothing is installed."""

    compiler: str | None
    language: Language
    fallback: bool = False

    @property
    def found(self) -> bool:
        return self.compiler is not None


def resolve_compiler(
    preferred: str,
    source: str | Path,
    *,
    console: Console | None = None,
    search_path: str | None = None,
) -> Resolution:
    """Select a compiler for *source*.

    An explicit *preferred* compiler is used as-is if it is executable and
    raises ``PreferredCompilerNotFound`` otherwise. Without one, the ranked
    list for the source language is scanned; C sources may fall back to a
    C++ compiler, C++ sources never fall back to a C compiler.
    """
    language = detect_language(source)
    if console is not None:
        ext = Path(source).suffix.lstrip(".").lower()
        console.detail(
            f"Detected {language.display} source file based on extension '.{ext}'"
        )

    if preferred:
        if command_exists(preferred, search_path=search_path):
            return Resolution(preferred, language)
        raise PreferredCompilerNotFound(preferred)

    for candidate in language.candidates:
        if command_exists(candidate, search_path=search_path):
            return Resolution(candidate, language)

    if language is Language.C:
        for candidate in CPP_COMPILERS:
            if command_exists(candidate, search_path=search_path):
                if console is not None:
                    console.warn(
                        f"No valid C compiler found. Using '{candidate}' "
                        "(a C++ compiler) for C source"
                    )
                return Resolution(candidate, language, fallback=True)

    return Resolution(None, language)


def resolve(preferred: str, source: str | Path, *, search_path: str | None = None) -> str:
    """Like ``resolve_compiler`` but returns the bare name, "" if none."""
    return resolve_compiler(preferred, source, search_path=search_path).compiler or ""
