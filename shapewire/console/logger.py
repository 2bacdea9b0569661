"""Rich console output for shape plans and wiring failures.

A plan reads best as a table with one row per layer, and a wiring failure
should show both the layer that could not be wired and, when a
preprocessor refused the input first, what that preprocessor expected.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme


SHAPEWIRE_THEME = Theme(
    {
        "success": "bold #9ece6a",
        "error": "bold #f7768e",
        "highlight": "bold #bb9af7",
        "muted": "dim #565f89",
        "metric": "#7aa2f7",
        "path": "italic #73daca",
        "step": "#ff9e64",
    }
)


class Logger:
    """Themed console shared by the propagator, the planner and the CLI."""

    def __init__(self) -> None:
        self.console = Console(theme=SHAPEWIRE_THEME)

    def log(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def success(self, message: str) -> None:
        self.console.print(f"[success]✓[/success] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[error]✗[/error] {escape(message)}")

    def failure(self, exc: BaseException) -> None:
        """Report `exc`, then each exception it was raised from."""
        self.error(f"Error: {exc}")
        cause = exc.__cause__
        while cause is not None:
            self.console.print(f"  [muted]caused by:[/muted] {escape(str(cause))}")
            cause = cause.__cause__

    def header(self, title: str, network: str | None = None) -> None:
        """Rule-style header naming the network a plan belongs to."""
        text = Text("━━━ ", style="muted")
        text.append(title, style="highlight")
        if network:
            text.append(f" • {network}", style="muted")
        text.append(" " + "━" * 40, style="muted")
        self.console.print()
        self.console.print(text)
        self.console.print()

    def table(self, title: str | None, columns: Iterable[str]) -> Table:
        """Return an empty themed table with `columns`; the caller adds rows."""
        table = Table(
            title=title,
            title_style="highlight",
            header_style="highlight",
            border_style="muted",
            row_styles=["", "dim"],
        )
        for column in columns:
            table.add_column(column)
        return table

    def key_value(self, data: Mapping[str, object]) -> None:
        """Print a borderless two-column summary, e.g. input/layers/output."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="muted")
        table.add_column(style="metric")
        for key, value in data.items():
            table.add_row(f"{key}:", str(value))
        self.console.print(table)

    def step(self, current: int, total: int, message: str) -> None:
        """Print `[current/total] message` for one layer of a pass."""
        self.console.print(
            f"[step]\\[{current}/{total}][/step] {escape(message)}"
        )

    def path(self, filepath: str, label: str) -> None:
        self.console.print(f"  [muted]{label}:[/muted] [path]{escape(filepath)}[/path]")


_logger: Logger | None = None


def get_logger() -> Logger:
    """Return the process-wide Logger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger
