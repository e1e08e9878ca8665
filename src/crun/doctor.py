"""Check which compilers are installed and whether they actually work.

The doctor writes only to its own scratch directory and reports; it never
decides the exit status of the process.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from crun.compilers import CPP_COMPILERS, C_COMPILERS, Language
from crun.console import Console
from crun.errors import CompilationFailed
from crun.locator import find_command
from crun.process import compile_source, run_command

_C_PROGRAM = """\
#include <stdio.h>

int main(void) {
    printf("Hello from crun doctor!\\n");
    return 0;
}
"""

_CPP_PROGRAM = """\
#include <iostream>

int main() {
    std::cout << "Hello from crun doctor!" << std::endl;
    return 0;
}
"""

_PROGRAMS = {
    Language.C: ("dummy.c", _C_PROGRAM),
    Language.CPP: ("dummy.cpp", _CPP_PROGRAM),
}


def default_scratch_dir() -> Path:
    return Path.home() / ".crun" / "doctor" / "dummy"


@dataclass(frozen=True)
class DiagnosticResult:
    """What the doctor found out about one candidate."""

    compiler: str
    language: Language
    path: str = ""
    validated: bool | None = None  # None: not validated

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def ok(self) -> bool:
        return self.found and self.validated is not False


@dataclass
class DoctorReport:
    results: dict[Language, list[DiagnosticResult]] = field(
        default_factory=lambda: {Language.C: [], Language.CPP: []},
    )

    def working(self, language: Language) -> int:
        return sum(1 for r in self.results[language] if r.ok)

    def found(self, language: Language) -> list[DiagnosticResult]:
        return [r for r in self.results[language] if r.found]


def write_scratch_sources(scratch_dir: Path) -> dict[Language, Path]:
    """(Re)write the dummy programs. Raises OSError if that fails."""
    scratch_dir.mkdir(parents=True, exist_ok=True)
    sources: dict[Language, Path] = {}
    for language, (name, text) in _PROGRAMS.items():
        path = scratch_dir / name
        path.write_text(text)
        sources[language] = path
    return sources


def validate_compiler(compiler: str, source: Path, scratch_dir: Path) -> bool:
    """Compile and run *source* with exactly *compiler*, quietly.

    *compiler* may be a bare name or the full path the locator found.
    """
    safe = Path(compiler).stem.replace("+", "p")
    binary = scratch_dir / f"dummy_{safe}{'.exe' if os.name == 'nt' else ''}"
    try:
        compile_source(compiler, binary, source, quiet=True)
        return run_command(str(binary), quiet=True)
    except CompilationFailed:
        return False
    finally:
        try:
            binary.unlink(missing_ok=True)
        except OSError:
            pass


def run_diagnostics(
    console: Console,
    *,
    validate: bool = True,
    scratch_dir: Path | None = None,
    search_path: str | None = None,
) -> DoctorReport:
    """Probe every known C and C++ compiler and print a report."""
    report = DoctorReport()
    sources: dict[Language, Path] = {}
    if validate:
        scratch_dir = scratch_dir or default_scratch_dir()
        sources = write_scratch_sources(scratch_dir)

    console.heading("Running doctor...")

    for language in (Language.C, Language.CPP):
        console.status(f"\nChecking for {language.display} compilers...")
        for compiler in language.candidates:
            path = find_command(compiler, search_path=search_path) or ""
            validated = None
            if path and validate:
                validated = validate_compiler(path, sources[language], scratch_dir)
            result = DiagnosticResult(compiler, language, path, validated)
            report.results[language].append(result)
            _report_candidate(console, result)
        _report_language(console, report, language)

    console.status("\nDoctor finished.")
    return report


def _report_candidate(console: Console, result: DiagnosticResult) -> None:
    if not result.found:
        console.detail(f"{result.compiler} not found")
        return
    if result.validated is False:
        console.failed(
            f"Found {result.compiler} at {result.path}, "
            "but it failed to compile or run a test program"
        )
    else:
        console.passed(f"Found {result.compiler} at {result.path}")


def _report_language(console: Console, report: DoctorReport, language: Language) -> None:
    count = report.working(language)
    if count == 0:
        console.failed(
            f"0 found: no working {language.display} compiler. Please install at "
            f"least one of the following compilers: {', '.join(language.candidates)}."
        )
    elif count == 1:
        console.passed(f"Found 1 working compiler for {language.display}.")
    else:
        console.status(
            f"Found {count} working {language.display} compilers (only 1 is needed)."
        )


def list_compilers(which: str, *, search_path: str | None = None) -> list[str]:
    """Installed compilers for ``c``, ``cpp`` or ``all``, in ranked order."""
    if which == "c":
        candidates = C_COMPILERS
    elif which == "cpp":
        candidates = CPP_COMPILERS
    elif which == "all":
        candidates = tuple(dict.fromkeys(C_COMPILERS + CPP_COMPILERS))
    else:
        raise ValueError(f"unknown compiler set '{which}' (expected c, cpp or all)")
    return [c for c in candidates if find_command(c, search_path=search_path)]
