"""open-in-ado CLI.

Resolves the remote of a local file and prints or opens a deep link into the
hosted repository's web viewer, scoped to a line/column selection.
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.git_client import GitCli
from cli import doctor
from cli.logging_setup import setup_logging
from cli.ui_components import build_link_panel, print_error
from core.config import AppSettings
from core.domain.errors import DeepLinkError
from core.domain.models import DeepLink, Selection, make_selection, parse_selection
from core.services.deep_link import resolve_deep_link

app = typer.Typer(
    name="open-in-ado",
    help="Open the selected lines of a local file in the repository's web viewer.",
    no_args_is_help=True,
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)

_SELECTION_HELP = "Selection as LINE[:COL][-LINE[:COL]], e.g. 10:1-12:5. Defaults to 1:1."


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git queries (DEBUG)."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


def _selection_from_args(
    selection: str | None,
    line: int | None,
    line_end: int | None,
    column: int | None,
    column_end: int | None,
) -> Selection:
    has_options = any(v is not None for v in (line, line_end, column, column_end))
    if selection is not None and has_options:
        raise typer.BadParameter("use either SELECTION or --line/--column options, not both")
    if selection is not None:
        return parse_selection(selection)
    if line is None:
        if has_options:
            raise typer.BadParameter("--line is required with --line-end/--column/--column-end")
        return make_selection(1, 1)
    return make_selection(line, 1 if column is None else column, line_end, column_end)


def _resolve(
    settings: AppSettings,
    file: Path,
    selection: str | None,
    line: int | None,
    line_end: int | None,
    column: int | None,
    column_end: int | None,
) -> DeepLink:
    try:
        chosen = _selection_from_args(selection, line, line_end, column, column_end)
        return resolve_deep_link(file, chosen, vcs=GitCli(settings), settings=settings)
    except DeepLinkError as exc:
        print_error(_err_console, exc)
        raise typer.Exit(code=1) from exc


@app.command()
def link(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File to link to."),
    selection: str | None = typer.Argument(None, help=_SELECTION_HELP),
    line: int | None = typer.Option(None, "--line", "-l", help="Start line (1-based)."),
    line_end: int | None = typer.Option(None, "--line-end", help="End line (1-based)."),
    column: int | None = typer.Option(None, "--column", "-c", help="Start column (1-based)."),
    column_end: int | None = typer.Option(None, "--column-end", help="End column (1-based)."),
    as_json: bool = typer.Option(False, "--json", help="Print the resolved link as JSON."),
) -> None:
    """Print the deep link for FILE and SELECTION."""

    deep_link = _resolve(ctx.obj, file, selection, line, line_end, column, column_end)
    if as_json:
        typer.echo(deep_link.model_dump_json(indent=2))
    else:
        typer.echo(deep_link.url)


@app.command(name="open")
def open_link(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="File to open."),
    selection: str | None = typer.Argument(None, help=_SELECTION_HELP),
    line: int | None = typer.Option(None, "--line", "-l", help="Start line (1-based)."),
    line_end: int | None = typer.Option(None, "--line-end", help="End line (1-based)."),
    column: int | None = typer.Option(None, "--column", "-c", help="Start column (1-based)."),
    column_end: int | None = typer.Option(None, "--column-end", help="End column (1-based)."),
    print_url: bool = typer.Option(False, "--print/--no-print", help="Also print the URL on stdout."),
) -> None:
    """Open the deep link for FILE and SELECTION in the default browser."""

    deep_link = _resolve(ctx.obj, file, selection, line, line_end, column, column_end)
    _err_console.print(build_link_panel(deep_link))
    if print_url:
        typer.echo(deep_link.url)

    code = typer.launch(deep_link.url)
    if code != 0:
        _err_console.print(f"[yellow]Browser launcher exited with status {code}.[/yellow]")
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
