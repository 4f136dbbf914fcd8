from __future__ import annotations

import io

from rich.console import Console

from devflow.core.reporter import Reporter
from devflow.utils.theme import select_theme


def test_output_is_written_verbatim(reporter, console) -> None:
    reporter.output("[bold]not markup[/bold]\nline two\n")
    assert console.export_text() == "[bold]not markup[/bold]\nline two\n"


def test_output_adds_missing_newline(reporter, console) -> None:
    reporter.output("no newline")
    assert console.export_text() == "no newline\n"


def test_output_ignores_empty_text(reporter, console) -> None:
    reporter.output("")
    assert console.export_text() == ""


def test_banners_use_theme_roles() -> None:
    console = Console(file=io.StringIO(), record=True, theme=select_theme("dark"))
    reporter = Reporter(console)
    reporter.success("ok")
    reporter.error("bad")
    rendered = console.export_text(styles=True)
    assert "ok" in rendered
    assert "bad" in rendered
    assert "\x1b[" in rendered


def test_plain_console_renders_text() -> None:
    console = Console(file=io.StringIO(), record=True, theme=select_theme("light"), no_color=True)
    reporter = Reporter(console)
    reporter.warn("careful")
    reporter.divider("Lint")
    text = console.export_text()
    assert "careful" in text
    assert "Lint" in text
    assert console.no_color
