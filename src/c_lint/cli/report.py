import os
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from c_lint.models import FileError, Lint


def display_path(path: Path) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:
        return str(path)


def format_lint(lint: Lint) -> str:
    start = lint.range.start_point
    return f"{display_path(lint.file)}:{start.row + 1}:{start.column + 1} {lint.message} `{lint.text}`"


def _print_plain(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def render_lints(console: Console, lints: Sequence[Lint]) -> None:
    for lint in lints:
        _print_plain(console, format_lint(lint))
        for i, sublint in enumerate(lint.sublints or [], start=1):
            _print_plain(console, f"  {i}) {format_lint(sublint)}")


def render_errors(console: Console, errors: Sequence[FileError]) -> None:
    for error in errors:
        console.print("[red]error:[/red] ", end="")
        _print_plain(console, f"{display_path(error.file)}: {error.message}")
