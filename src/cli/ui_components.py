"""CLI UI components (Rich).

Keeps visual details (panels, tables) out of the command logic.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AssemblyResult


def print_banner(console: Console, session_id: str) -> None:
    """Print the welcome banner for a run."""

    title = Text("Screenshots → PDF", style="bold cyan")
    subtitle = Text(f"Session {session_id}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_pages_table(result: AssemblyResult) -> Table:
    """Table with one row per page of the generated document."""

    table = Table(title="PDF Pages")
    table.add_column("#", style="cyan", justify="right", no_wrap=True)
    table.add_column("File", style="white")
    table.add_column("Width", style="green", justify="right")
    table.add_column("Height", style="green", justify="right")
    for number, page in enumerate(result.pages, start=1):
        table.add_row(str(number), page.filename, str(page.width), str(page.height))
    if result.skipped:
        table.caption = f"Skipped: {', '.join(result.skipped)}"
    return table
