"""Colored terminal reporting built on rich."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

console = Console()
error_console = Console(stderr=True)


@dataclass
class Reporter:
    """Writes progress messages for one command invocation.

    ``verbose`` controls whether git commands and their output are echoed.
    """

    verbose: bool = False
    out: Console = console
    err: Console = error_console

    def info(self, message: str) -> None:
        self.out.print(f"[cyan]Info: {escape(message)}[/]")

    def check(self, message: str) -> None:
        self.out.print(f"[green]✓ {escape(message)}[/]")

    def warn(self, message: str) -> None:
        self.out.print(f"[yellow]Warning: {escape(message)}[/]")

    def error(self, message: str) -> None:
        self.err.print(f"[red]Error: {escape(message)}[/]")

    def command(self, text: str, output: str = "") -> None:
        """Echo a git command and its output when verbose."""
        if not self.verbose:
            return
        self.out.print(f"[dim]$ {escape(text)}[/]")
        if output:
            self.out.print(escape(output), style="dim", highlight=False)
