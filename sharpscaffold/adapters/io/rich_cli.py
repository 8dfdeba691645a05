"""
Rich CLI components for sharpscaffold.

Theme and small display helpers used by the command line interface.
"""

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from ...domain.models import GenerationReport

# Minimal theme with a restricted palette
SHARPSCAFFOLD_THEME = Theme(
    {
        "primary": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "muted": "dim",
        "title": "bold cyan",
        "header": "bold",
        "border": "dim",
    }
)


class RichCliComponents:
    """Display helpers bound to one console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(theme=SHARPSCAFFOLD_THEME)

    def display_error(self, message: str, title: str = "Error") -> None:
        self.console.print(
            Panel(f"[error]{escape(message)}[/]", title=f"[error]{title.lower()}[/]", border_style="border")
        )

    def display_errors(self, errors: Iterable[Exception], title: str = "Generation failed") -> None:
        table = Table(title=f"[title]{title}[/]", header_style="header", box=None, expand=True)
        table.add_column("Error", style="error", no_wrap=True)
        table.add_column("Details")
        for error in errors:
            table.add_row(type(error).__name__, escape(str(error)))
        self.console.print(table)

    def display_info(self, message: str, title: str = "Info") -> None:
        self.console.print(
            Panel(escape(message), title=f"[primary]{title.lower()}[/]", border_style="border")
        )

    def display_success(self, message: str, title: str = "Success") -> None:
        self.console.print(
            Panel(f"[success]{message}[/]", title=f"[success]{title.lower()}[/]", border_style="border")
        )

    def display_report(self, report: GenerationReport) -> None:
        """Summarize a successful run: counts plus one row per written file."""
        verb = "Would write" if report.dry_run else "Wrote"
        self.display_success(
            f"Read {report.files_read} file(s), generated {report.units_generated} "
            f"test class(es). {verb} {len(report.written_files)} file(s).",
            "Generation complete",
        )
        if not report.written_files:
            return

        table = Table(header_style="header", box=None, expand=True)
        table.add_column("Test class", style="primary")
        table.add_column("Path", style="muted")
        for written in report.written_files:
            path = Path(written)
            table.add_row(path.stem, str(path))
        self.console.print(table)
