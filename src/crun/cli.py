"""crun command-line interface."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from crun import __version__
from crun.cache import build_dir, find_source, needs_rebuild, prepare_output
from crun.config import load_nearest_config
from crun.console import Console
from crun.errors import CrunError, NoCompilerFound, TerminalLaunchError
from crun.process import compile_source, run_command
from crun.resolver import resolve_compiler

_GROUP_OPTIONS = ("-h", "--help", "--version")

_EPILOG = """\
\b
Examples:
  crun init my_program.c
  crun init myprogram          creates myprogram.c
  crun -v -e "-Wall -O2" -r "arg1 arg2" my_program.c
  crun fmt my_program.c main.cpp
"""


class _RunByDefault(click.Group):
    """Treat ``crun FILE ...`` as ``crun run FILE ...``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if args and args[0] not in self.commands and args[0] not in _GROUP_OPTIONS:
            args = ["run", *args]
        return super().parse_args(ctx, args)


def _console(verbose: bool = False) -> Console:
    return Console(color=sys.stdout.isatty(), verbose=verbose)


def _fail(console: Console, error: CrunError) -> None:
    console.error(str(error))
    raise SystemExit(error.exit_code)


@click.group(
    cls=_RunByDefault,
    epilog=_EPILOG,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, prog_name="crun")
@click.pass_context
def main(ctx: click.Context) -> None:
    """crun - compile and run C/C++ files quickly."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("file")
@click.option("-v", "--verbose", is_flag=True, help="Verbose mode.")
@click.option("-n", "--recompile", is_flag=True, help="Always recompile.")
@click.option("-c", "--compiler", default=None, help="Choose compiler.")
@click.option("-e", "--extra", "extra_flags", default=None, help="Extra compiler flags.")
@click.option("-o", "--output", "output_name", default=None, help="Output binary name.")
@click.option("-d", "--directory", "output_dir", default=None, help="Output directory.")
@click.option("-r", "--run-args", default=None, help="Arguments passed to the binary.")
@click.option("--new-terminal", "-ntw", is_flag=True, help="Run in a new terminal window.")
def run(
    file: str,
    verbose: bool,
    recompile: bool,
    compiler: str | None,
    extra_flags: str | None,
    output_name: str | None,
    output_dir: str | None,
    run_args: str | None,
    new_terminal: bool,
) -> None:
    """Compile FILE if it changed, then run it."""
    console = _console(verbose)

    try:
        config = load_nearest_config()
        compiler = config.build.compiler if compiler is None else compiler
        extra_flags = config.build.extra_flags if extra_flags is None else extra_flags
        output_dir = output_dir or config.build.output_dir
        run_args = config.run.args if run_args is None else run_args
        new_terminal = new_terminal or config.run.new_terminal

        source = find_source(file)
        if not Path(file).suffix:
            console.detail(f"No extension was provided, detected source file is '{source}'")
        directory = Path(output_dir).absolute() if output_dir else build_dir()
        exe = prepare_output(source, directory, output_name)
        _build(source, exe, compiler, extra_flags, force=recompile, console=console)
    except CrunError as e:
        _fail(console, e)

    _run_binary(exe, run_args, new_terminal=new_terminal, console=console)


def _build(
    source: Path,
    exe: Path,
    compiler: str,
    extra_flags: str,
    *,
    force: bool,
    console: Console,
) -> None:
    if not needs_rebuild(source, exe, force=force):
        console.status(
            "No changes detected, skipping recompilation. "
            "Use '-n' to always recompile."
        )
        return

    resolution = resolve_compiler(compiler, source, console=console)
    if resolution.compiler is None:
        language = resolution.language
        raise NoCompilerFound(language.display, language.candidates)

    console.status(f"Using compiler: {resolution.compiler}")
    compile_source(resolution.compiler, exe, source, extra_flags)
    console.status("Compilation succeeded")


def _run_binary(exe: Path, run_args: str, *, new_terminal: bool, console: Console) -> None:
    if not exe.exists():
        console.error(f"Executable not found: {exe}")
        return

    args = run_args.split()
    if new_terminal:
        console.status("Running in new terminal...")
        from crun.terminal import launch_in_terminal

        try:
            launch_in_terminal(str(exe), args)
        except TerminalLaunchError as e:
            console.error(f"Failed to launch in new terminal: {e}")
        return

    console.detail("Running in current terminal...")
    if not console.verbose:
        console.clear()
    if not run_command(str(exe), args):
        console.warn(f"{exe.name} exited with a failure status")


@main.command()
@click.option(
    "--validate/--no-validate", default=None,
    help="Compile and run a test program with every compiler found.",
)
@click.option("-v", "--verbose", is_flag=True, help="Also list compilers not found.")
def doctor(validate: bool | None, verbose: bool) -> None:
    """Check this machine for usable C/C++ compilers."""
    from crun.doctor import run_diagnostics

    console = _console(verbose)
    if validate is None:
        try:
            validate = load_nearest_config().doctor.validate
        except CrunError as e:
            _fail(console, e)
    try:
        run_diagnostics(console, validate=validate)
    except OSError as e:
        console.error(f"doctor could not write its scratch files: {e}")
        raise SystemExit(1)


@main.command(name="list")
@click.argument("which", default="all", type=click.Choice(["c", "cpp", "all"]))
def list_cmd(which: str) -> None:
    """List installed compilers for C, C++ or all."""
    from crun.doctor import list_compilers

    for compiler in list_compilers(which):
        click.echo(compiler)


@main.command()
@click.argument("name", default="main.c")
def init(name: str) -> None:
    """Create a hello-world C/C++ source file (default: main.c)."""
    from crun.scaffold import init_source_file

    try:
        path, created = init_source_file(name)
    except OSError as e:
        click.echo(f"error: failed to create file {name}: {e}", err=True)
        raise SystemExit(1)
    if created:
        click.echo(f"Created '{path}'")
    else:
        click.echo(f"File '{path}' already exists. Skipping creation.")


@main.command(name="fmt")
@click.argument("targets", nargs=-1)
def fmt_cmd(targets: tuple[str, ...]) -> None:
    """Format C/C++ source files with an installed formatter."""
    from crun.formatter import FORMATTERS, detect_formatter, format_file, resolve_targets

    console = _console()
    files = resolve_targets(targets)
    if not files:
        console.failed("No C/C++ source files found to format.")
        raise SystemExit(1)

    tool = detect_formatter()
    if tool is None:
        console.failed(f"No supported formatter found ({', '.join(FORMATTERS)}).")
        raise SystemExit(1)

    failures = 0
    for path in files:
        if format_file(tool, path):
            console.passed(f"Formatted {path}")
        else:
            console.failed(f"Failed to format {path}")
            failures += 1
    if failures:
        raise SystemExit(1)


main.add_command(fmt_cmd, name="format")
