"""Format C/C++ sources with whichever external formatter is installed."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from crun.locator import command_exists
from crun.process import run_command

FORMATTERS = ("clang-format", "astyle", "uncrustify", "indent")

FORMAT_EXTENSIONS = (".c", ".cpp", ".cc", ".cxx", ".h", ".hpp")

_CONFIGS = {
    "clang-format": (
        ".clang-format",
        "BasedOnStyle: LLVM\n"
        "IndentWidth: 4\n"
        "ColumnLimit: 100\n",
    ),
    "uncrustify": (
        "uncrustify.cfg",
        "indent_columns = 4\n"
        "sp_brace_open = add\n"
        "nl_after_func_proto = true\n",
    ),
}


def detect_formatter(*, search_path: str | None = None) -> str | None:
    for tool in FORMATTERS:
        if command_exists(tool, search_path=search_path):
            return tool
    return None


def config_dir(home: Path | None = None) -> Path:
    return (home or Path.home()) / ".crun" / "configs" / "formatters"


def ensure_formatter_config(tool: str, home: Path | None = None) -> Path | None:
    """Write the default config for *tool* once and return its path.

    astyle and indent run without a config file; None for those.
    """
    if tool not in _CONFIGS:
        return None
    name, default = _CONFIGS[tool]
    directory = config_dir(home)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    if not path.exists():
        path.write_text(default)
    return path


def format_args(tool: str, path: Path, config: Path | None) -> list[str]:
    """Arguments that make *tool* rewrite *path* in place."""
    if tool == "clang-format":
        args = ["-i"]
        if config is not None:
            args.append(f"--style=file:{config}")
        args.extend(["--fallback-style=LLVM", str(path)])
        return args
    if tool == "uncrustify":
        args = ["-c", str(config)] if config is not None else []
        return [*args, "--no-backup", str(path)]
    if tool in ("astyle", "indent"):
        return [str(path)]
    raise ValueError(f"unsupported formatter '{tool}'")


def format_file(tool: str, path: Path, *, home: Path | None = None) -> bool:
    config = ensure_formatter_config(tool, home)
    return run_command(tool, format_args(tool, path, config))


def _sources_in(directory: Path) -> list[Path]:
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in FORMAT_EXTENSIONS
    )


def resolve_targets(args: Sequence[str]) -> list[Path]:
    """Expand command-line targets to the files to format.

    No targets or ``.`` means the current directory. Directories are not
    searched recursively. A bare name matches every ``name.<ext>`` present.
    """
    if not args or list(args) == ["."]:
        return _sources_in(Path.cwd())

    targets: list[Path] = []
    for arg in args:
        base = Path(arg)
        if base.is_dir():
            targets.extend(_sources_in(base))
        elif base.is_file():
            targets.append(base)
        else:
            for ext in FORMAT_EXTENSIONS:
                candidate = base.with_name(base.name + ext)
                if candidate.is_file():
                    targets.append(candidate)
    return targets
