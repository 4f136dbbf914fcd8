"""Themed status output on a rich console."""

from __future__ import annotations

from rich.console import Console


class Reporter:
    """Print status banners using the theme roles of the console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def divider(self, title: str = "") -> None:
        self.console.rule(title, style="divider")

    def info(self, message: str) -> None:
        self.console.print(message, style="info", markup=False, highlight=False)

    def success(self, message: str) -> None:
        self.console.print(message, style="success", markup=False, highlight=False)

    def warn(self, message: str) -> None:
        self.console.print(message, style="warn", markup=False, highlight=False)

    def error(self, message: str) -> None:
        self.console.print(message, style="error", markup=False, highlight=False)

    def output(self, text: str) -> None:
        """Write captured tool output verbatim."""
        if not text:
            return
        self.console.out(text, end="" if text.endswith("\n") else "\n", highlight=False)
