"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status messages, a spinner for the mirror run and the final
summary. Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from src.tree_mirror.models import MirrorResult


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> with handler.spinner("Mirroring..."):
        ...     pass
        >>> handler.print_mirror_summary(result)
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a long operation runs.

        Example:
            >>> with handler.spinner("Mirroring Drive folder..."):
            ...     asyncio.run(mirror.run(config))
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_mirror_summary(self, result: MirrorResult) -> None:
        """Display mirror summary with color coding.

        Args:
            result: MirrorResult returned by TreeMirror.run
        """
        self.console.print("\n[bold]Mirror Summary:[/bold]")
        self.console.print(
            f"  [dim]─[/dim] Discovered: {result.containers_found} folder(s), "
            f"{result.files_found} file(s)"
        )

        if result.directories_created > 0:
            self.console.print(f"  [blue]+[/blue] Created: {result.directories_created} director(y/ies)")

        if result.files_written > 0:
            self.console.print(f"  [green]↓[/green] Written: {result.files_written} file(s)")

        if result.skipped_empty > 0:
            self.console.print(f"  [dim]⊘[/dim] Skipped (no content): {result.skipped_empty} file(s)")

        if result.skipped_unresolved > 0:
            self.console.print(
                f"  [yellow]⊘[/yellow] Skipped (outside tree): {result.skipped_unresolved} file(s)"
            )

        if result.skipped_duplicate > 0:
            self.console.print(
                f"  [yellow]⊘[/yellow] Skipped (duplicate name): {result.skipped_duplicate} file(s)"
            )

        if result.unresolved_container_ids:
            self.console.print(
                f"  [yellow]⚠[/yellow] Unresolved folders: {len(result.unresolved_container_ids)}"
            )

        if result.files_found == 0:
            self.console.print("\n[yellow]No files found to mirror[/yellow]")
        elif result.skipped_unresolved or result.skipped_duplicate:
            self.console.print("\n[yellow]Mirror completed with skipped files[/yellow]")
        else:
            self.console.print("\n[green]Mirror completed successfully[/green]")
