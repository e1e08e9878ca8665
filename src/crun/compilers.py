"""Known compilers and the command line each one needs.

Every supported compiler belongs to a ``CompilerFamily``. A family knows
how to spell "compile SOURCE into OUTPUT" and where user flags may go;
an identifier that matches no family gets the ``GENERIC`` Unix form.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PureWindowsPath

from crun.locator import WINDOWS_EXTENSIONS

# Ranked: the first reachable candidate wins.
C_COMPILERS = ("gcc", "clang", "zig", "cl", "icc", "tcc", "pcc")
CPP_COMPILERS = ("g++", "clang++", "cl", "icpc")


class Language(Enum):
    C = ("C", C_COMPILERS, (".c",))
    CPP = ("C++", CPP_COMPILERS, (".cpp", ".cc", ".cxx"))

    def __init__(
        self, display: str, candidates: tuple[str, ...], extensions: tuple[str, ...],
    ) -> None:
        self.display = display
        self.candidates = candidates
        self.extensions = extensions


def detect_language(source: str | Path) -> Language:
    """``.cpp``/``.cc``/``.cxx`` are C++, anything else is C."""
    suffix = Path(source).suffix.lower()
    if suffix in Language.CPP.extensions:
        return Language.CPP
    return Language.C


class FlagPlacement(Enum):
    AFTER_OUTPUT = "after-output"
    BEFORE_SOURCE = "before-source"
    APPEND = "append"


@dataclass(frozen=True)
class _Syntax:
    names: tuple[str, ...]
    output: tuple[str, ...] = ("-o", "{output}")
    subcommand: tuple[str, ...] = ()
    trailing: tuple[str, ...] = ()
    placement: FlagPlacement = FlagPlacement.BEFORE_SOURCE


class CompilerFamily(Enum):
    GCC = _Syntax(names=("gcc", "g++"))
    CLANG = _Syntax(
        names=("clang", "clang++"),
        trailing=("-Wno-deprecated-declarations", "-D_CRT_SECURE_NO_WARNINGS"),
    )
    MSVC = _Syntax(
        names=("cl",),
        output=("/Fe:{output}",),
        placement=FlagPlacement.AFTER_OUTPUT,
    )
    ZIG = _Syntax(names=("zig",), subcommand=("cc",))
    INTEL = _Syntax(names=("icc", "icpc"))
    LIGHTWEIGHT = _Syntax(names=("tcc", "pcc", "lcc", "sdcc"))
    WATCOM = _Syntax(
        names=("wcl",), output=("-fe={output}",), placement=FlagPlacement.APPEND,
    )
    BORLAND = _Syntax(
        names=("bcc32",), output=("-e{output}",), placement=FlagPlacement.APPEND,
    )
    DIGITAL_MARS = _Syntax(
        names=("dmc",), output=("-o{output}",), placement=FlagPlacement.APPEND,
    )
    GENERIC = _Syntax(names=())

    @property
    def syntax(self) -> _Syntax:
        return self.value

    @property
    def placement(self) -> FlagPlacement:
        return self.value.placement


_BY_NAME = {
    name: family for family in CompilerFamily for name in family.syntax.names
}


def family_for(compiler: str) -> CompilerFamily:
    """Classify a compiler identifier, which may be a full path."""
    name = PureWindowsPath(compiler).name.lower()
    stem, dot, ext = name.rpartition(".")
    if dot and ext in WINDOWS_EXTENSIONS:
        name = stem
    return _BY_NAME.get(name, CompilerFamily.GENERIC)


@dataclass(frozen=True)
class InvocationSpec:
    """The program to start and the arguments to pass it."""

    program: str
    args: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


def build_invocation(
    compiler: str,
    output: str | Path,
    source: str | Path,
    extra_flags: str = "",
) -> InvocationSpec:
    """Build the command line that compiles *source* into *output*."""
    syntax = family_for(compiler).syntax
    out = str(output)

    head = [*syntax.subcommand, *(part.format(output=out) for part in syntax.output)]
    args = [*head, str(source), *syntax.trailing]

    flags = extra_flags.split()
    if flags:
        if syntax.placement is FlagPlacement.APPEND:
            args.extend(flags)
        elif syntax.placement is FlagPlacement.AFTER_OUTPUT:
            at = len(syntax.subcommand) + len(syntax.output)
            args[at:at] = flags
        else:
            # the source sits right after the output spelling
            at = len(head)
            args[at:at] = flags

    return InvocationSpec(program=compiler, args=tuple(args))


def build_args(
    compiler: str,
    output: str | Path,
    source: str | Path,
    extra_flags: str = "",
) -> list[str]:
    return list(build_invocation(compiler, output, source, extra_flags).args)
