"""TOML config loading for crun.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from crun.errors import ConfigError

CONFIG_NAME = "crun.toml"


@dataclass
class BuildConfig:
    compiler: str = ""
    extra_flags: str = ""
    output_dir: str = ""


@dataclass
class RunConfig:
    args: str = ""
    new_terminal: bool = False


@dataclass
class DoctorConfig:
    validate: bool = True


@dataclass
class CrunConfig:
    build: BuildConfig = field(default_factory=BuildConfig)
    run: RunConfig = field(default_factory=RunConfig)
    doctor: DoctorConfig = field(default_factory=DoctorConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find crun.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError("No crun.toml found in any parent directory")
        path = parent


def _section(path: Path, data: dict[str, Any], name: str, cls: type) -> Any:
    """Build the dataclass *cls* from table *name*, checking value types."""
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(path, f"[{name}] must be a table")

    values = {}
    for f in fields(cls):
        if f.name not in table:
            continue
        value = table[f.name]
        expected = type(f.default)
        if type(value) is not expected:
            raise ConfigError(
                path,
                f"{name}.{f.name} must be a {expected.__name__}, "
                f"not {type(value).__name__}",
            )
        values[f.name] = value
    return cls(**values)


def load_config(path: Path) -> CrunConfig:
    """Parse a crun.toml file into a CrunConfig.

    Raises ConfigError for malformed TOML or a value of the wrong type.
    Unknown keys are ignored.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(path, str(e)) from e

    return CrunConfig(
        build=_section(path, data, "build", BuildConfig),
        run=_section(path, data, "run", RunConfig),
        doctor=_section(path, data, "doctor", DoctorConfig),
    )


def load_nearest_config(start_path: Path | None = None) -> CrunConfig:
    """Load the closest crun.toml, or the defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return CrunConfig()
