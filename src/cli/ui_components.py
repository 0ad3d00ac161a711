"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets `link`, `open` and `doctor` reuse the same panels and tables.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import DeepLinkError
from core.domain.models import DeepLink


def build_link_panel(link: DeepLink) -> Panel:
    """Panel describing a resolved link (shown on stderr when launching a browser)."""

    body = Text()
    body.append("File: ", style="bold")
    body.append(f"{link.relative_path}\n")
    body.append("Selection: ", style="bold")
    body.append(f"{link.selection}\n")
    body.append("Repository: ", style="bold")
    body.append(f"{link.repo_root}\n\n", style="dim")
    body.append(link.url, style="magenta")
    return Panel(body, title=Text("Deep link", style="bold cyan"), border_style="cyan")


def build_error_panel(error: DeepLinkError) -> Panel:
    """Panel for a terminal error: message plus its details."""

    body = Text(error.message.strip() + "\n", style="bold")
    for key, value in error.details.items():
        body.append(f"\n{key}: ", style="dim")
        body.append(str(value))
    return Panel(body, title=Text("Error", style="bold red"), border_style="red")


def build_doctor_table() -> Table:
    table = Table(title="open-in-ado doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def print_error(console: Console, error: DeepLinkError) -> None:
    console.print(build_error_panel(error))
