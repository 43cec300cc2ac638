"""Console output for release-kit commands.

Commands build one :class:`ReleaseLogger` from their flags; quiet mode is
a property of that logger rather than global state.
"""

from __future__ import annotations

from rich.console import Console


class ReleaseLogger:
    """Status-line printer with a quiet mode.

    ``warn`` and ``error`` always print; everything else is suppressed
    when ``quiet`` is set. Errors go to the error console.
    """

    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
        *,
        quiet: bool = False,
    ) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.quiet = quiet

    def success(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[green]✓[/] {message}")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/] {message}")

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]✗[/] {message}")

    def step(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[bold]{message}[/]")

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"  {message}")

    def blank(self) -> None:
        if not self.quiet:
            self.console.print()

    def print(self, renderable: object) -> None:
        """Print a rich renderable (e.g. a Panel) unless quiet."""
        if not self.quiet:
            self.console.print(renderable)
