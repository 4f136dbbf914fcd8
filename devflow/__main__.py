"""Entry point for devflow."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Tuple, Type

import click
import typer
from rich.console import Console
from typer.core import TyperCommand

from devflow import __version__
from devflow.core.config import ConfigError, load_config
from devflow.core.constants import FLAG_ORDER_KEY
from devflow.core.pipeline import run_pipeline, run_single_action
from devflow.core.reporter import Reporter
from devflow.core.runner import ToolNotFoundError, ToolRunner
from devflow.core.state import args_through_first_action, build_run_config
from devflow.core.toolchain import resolve_toolchain
from devflow.utils.theme import select_theme


def _usage_error_types() -> Tuple[Type[Exception], ...]:
    """Collect UsageError from every click package TyperCommand is built on.

    Newer Typer releases bundle their own click, whose exceptions are not
    the ones exported by the standalone ``click`` distribution.
    """
    found = {click.UsageError}
    for base in TyperCommand.__mro__:
        package = base.__module__.rpartition(".")[0]
        for module_name in (f"{package}.exceptions", package):
            candidate = getattr(sys.modules.get(module_name), "UsageError", None)
            if isinstance(candidate, type) and issubclass(candidate, Exception):
                found.add(candidate)
    return tuple(found)


USAGE_ERRORS = _usage_error_types()


class UsageOnErrorCommand(TyperCommand):
    """Show help and exit cleanly on unknown or malformed flags.

    When an action flag comes before the bad input, the arguments are
    re-parsed up to that flag so the action still runs.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        original = list(args)
        try:
            return super().parse_args(ctx, list(original))
        except USAGE_ERRORS:
            leading = args_through_first_action(original)
            if leading is None or leading == original:
                raise self._help_exit(ctx) from None

        ctx.meta.pop(FLAG_ORDER_KEY, None)
        ctx.params.clear()
        try:
            return super().parse_args(ctx, leading)
        except USAGE_ERRORS:
            raise self._help_exit(ctx) from None

    @staticmethod
    def _help_exit(ctx: click.Context) -> typer.Exit:
        typer.echo(ctx.get_help())
        return typer.Exit(code=0)


def record_flag(ctx: typer.Context, param: typer.CallbackParam, value: bool) -> bool:
    """Typer callback that records set flags in command-line order."""
    if value and param.name:
        ctx.meta.setdefault(FLAG_ORDER_KEY, []).append(param.name)
    return value


app = typer.Typer(
    add_completion=False,
    help="Format, lint, test, check coverage and run a single-directory program",
)


@app.command(
    cls=UsageOnErrorCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
def main_command(
    ctx: typer.Context,
    mode: Optional[str] = typer.Option(None, "-m", "--mode", help="Color theme: dark|light"),
    lint: bool = typer.Option(False, "-l", "--lint", help="Lint only", callback=record_flag),
    test: bool = typer.Option(False, "-t", "--test", help="Test only", callback=record_flag),
    run: bool = typer.Option(False, "-r", "--run", help="Run only", callback=record_flag),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose lint/test output", callback=record_flag
    ),
    plain: bool = typer.Option(False, "--plain", help="Output plain text (no colors)"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 when any check fails"),
    legacy_flag_order: bool = typer.Option(
        False,
        "--legacy-flag-order",
        help="Apply -v only when it precedes the action flag",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    toolchain_name: Optional[str] = typer.Option(
        None, "--toolchain", help="Toolchain profile (go, python, or one from config)"
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Format, lint, test and check coverage, then run the program if everything passed."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    try:
        cfg = load_config(config.expanduser().resolve() if config else None)
        toolchain = resolve_toolchain(cfg, toolchain_name)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    flag_order: List[str] = ctx.meta.get(FLAG_ORDER_KEY, [])
    run_config = build_run_config(
        flag_order,
        mode=mode or cfg.get("theme"),
        verbose=verbose,
        plain=plain,
        strict=strict or bool(cfg.get("strict")),
        legacy_order=legacy_flag_order,
    )

    console = Console(
        theme=select_theme(run_config.color_mode),
        no_color=run_config.plain,
        highlight=False,
    )
    reporter = Reporter(console)
    runner = ToolRunner(cwd=Path.cwd())

    try:
        if run_config.single_action is not None:
            state = run_single_action(
                run_config.single_action,
                toolchain,
                runner,
                reporter,
                verbose=run_config.verbose,
            )
        else:
            state = run_pipeline(toolchain, runner, reporter, directory=Path.cwd())
    except ToolNotFoundError as exc:
        reporter.error(str(exc))
        raise typer.Exit(code=1)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    if run_config.strict and not state.all_passed:
        raise typer.Exit(code=1)


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
