"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import typer
from rich.console import Console
from rich.markup import escape

from adapters.git_client import GitCli
from cli.ui_components import build_doctor_table
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import DeepLinkError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check(fn: Callable[[], str]) -> tuple[bool, str]:
    try:
        return True, escape(fn())
    except DeepLinkError as exc:
        return False, escape(exc.message)


@app.command()
def run(
    path: Path = typer.Option(
        Path("."),
        "--path",
        "-p",
        help="Directory whose repository is checked.",
    ),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    git = GitCli(settings)
    cwd = path.expanduser().resolve()

    table = build_doctor_table()

    # Config
    table.add_row("git executable", "OK", escape(settings.git_executable))
    table.add_row("Remote name", "OK", settings.remote_name)
    table.add_row("Timeout", "OK", f"{settings.git_timeout_seconds:g}s")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", escape(str(env_file)))

    ok_git, detail_git = _check(lambda: git.version(cwd))
    table.add_row("git", "OK" if ok_git else "FAIL", detail_git)

    if ok_git:
        ok_remote, detail_remote = _check(lambda: git.get_remote_url(cwd))
        if ok_remote and not detail_remote.startswith("http"):
            ok_remote = False
            detail_remote = f"Not an http(s) URL: {detail_remote}"
        table.add_row("Remote URL", "OK" if ok_remote else "FAIL", detail_remote)

        ok_root, detail_root = _check(lambda: git.get_toplevel(cwd))
        table.add_row("Repository root", "OK" if ok_root else "FAIL", detail_root)

    _console.print(table)

    if not ok_git:
        _console.print(
            "\n[yellow]Note:[/yellow] Install git or point OPEN_IN_ADO_GIT_EXECUTABLE at it "
            "(`open-in-ado doctor configure`)."
        )


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = AppSettings()

    executable = typer.prompt("git executable", default=current.git_executable, show_default=True).strip()
    remote = typer.prompt("Remote name", default=current.remote_name, show_default=True).strip()
    timeout = typer.prompt(
        "git timeout (seconds)",
        default=current.git_timeout_seconds,
        type=float,
        show_default=True,
    )

    if not executable or not remote:
        raise typer.BadParameter("git executable and remote name are required")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be greater than zero")

    env_path = write_user_env_vars(
        {
            "OPEN_IN_ADO_GIT_EXECUTABLE": executable,
            "OPEN_IN_ADO_REMOTE_NAME": remote,
            "OPEN_IN_ADO_GIT_TIMEOUT_SECONDS": f"{timeout:g}",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
