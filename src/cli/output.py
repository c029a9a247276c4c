"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status messages, a spinner while the tree is fetched, and a table
summarizing the files that were produced. Supports verbosity levels and the
--no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, Sequence

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table

from src.models.tree_entry import EntryKind, TreeEntry


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> with handler.spinner("Reading page tree..."):
        ...     pass
        >>> handler.print_tree_summary(entries, "./out")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Example:
            >>> with handler.spinner("Fetching page..."):
            ...     pass
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_file_table(self, entries: Sequence[TreeEntry]) -> None:
        """Display every produced file with its kind and size, in emission order."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Kind")
        table.add_column("Path")
        table.add_column("Bytes", justify="right")
        for i, entry in enumerate(entries, start=1):
            table.add_row(str(i), entry.kind.value, entry.path, str(len(entry.content)))
        self.console.print(table)

    def print_tree_summary(self, entries: Sequence[TreeEntry], destination: str) -> None:
        """Display page/attachment counts and where the tree was written."""
        pages = sum(1 for e in entries if e.kind is EntryKind.PAGE)
        attachments = sum(1 for e in entries if e.kind is EntryKind.ATTACHMENT)

        self.console.print("\n[bold]Tree Summary:[/bold]")
        self.console.print(f"  [blue]↓[/blue] Pages: {pages}")
        self.console.print(f"  [blue]↓[/blue] Attachments: {attachments}")
        self.console.print(f"\n[green]Wrote {len(entries)} file(s) to {destination}[/green]")
