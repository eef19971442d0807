import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from c_lint import __version__
from c_lint.cli.report import render_errors, render_lints
from c_lint.config import get_settings
from c_lint.core.lint import run_lint
from c_lint.errors import LintError

EXIT_LINTS = 1
EXIT_ERROR = 2

app = typer.Typer(
    name="c-lint",
    help="Style and macro-aware logical line-count checks for C translation units.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"c-lint {__version__}")
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


@app.command()
def lint(
    files: Annotated[list[Path], typer.Argument(help="C source files to lint (root translation units).")],
    jobs: Annotated[int | None, typer.Option("--jobs", "-j", min=1, help="Files to lint in parallel.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Lint C files and every local header they include."""
    try:
        settings = get_settings().with_overrides(jobs=jobs, log_level="DEBUG" if verbose else None)
        _configure_logging(settings.log_level)
        result = run_lint(files, settings)
    except LintError as exc:
        err_console.print("[red]error:[/red] ", end="")
        err_console.print(str(exc), markup=False, highlight=False, emoji=False, soft_wrap=True)
        raise typer.Exit(EXIT_ERROR) from exc

    render_lints(console, result.lints)
    render_errors(err_console, result.errors)

    if result.errors:
        raise typer.Exit(EXIT_ERROR)
    if result.lints:
        raise typer.Exit(EXIT_LINTS)


def main() -> None:
    app()
