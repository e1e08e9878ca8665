"""Errors raised by crun. Only the CLI turns them into exit codes."""

from __future__ import annotations

from pathlib import Path


class CrunError(Exception):
    """Base class for failures that end a crun command."""

    exit_code = 1


class PreferredCompilerNotFound(CrunError):
    """Raised when the compiler named with ``--compiler`` is not executable."""

    def __init__(self, compiler: str) -> None:
        self.compiler = compiler
        super().__init__(f"Preferred compiler '{compiler}' not found")


class NoCompilerFound(CrunError):
    """Raised when no candidate compiler is reachable for a source file."""

    def __init__(self, language: str, candidates: tuple[str, ...]) -> None:
        self.language = language
        self.candidates = candidates
        super().__init__(
            f"No {language} compiler found "
            f"(install one of: {', '.join(candidates)})"
        )


class SourceNotFoundError(CrunError):
    """Raised when the requested source file cannot be located."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No valid source file found for '{name}'")


class BuildDirError(CrunError):
    """Raised when the output directory cannot be created."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to create directory {path}: {reason}")


class CompilationFailed(CrunError):
    """Raised when the compiler exits with a failure status."""

    def __init__(self, compiler: str, source: Path) -> None:
        self.compiler = compiler
        self.source = source
        super().__init__(f"Compilation failed ({compiler} {source})")


class TerminalLaunchError(CrunError):
    """Raised when the program cannot be started in a new terminal window."""


class ConfigError(CrunError):
    """Raised when crun.toml cannot be parsed or holds a value of the wrong type."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid config {path}: {reason}")
