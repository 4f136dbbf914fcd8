"""Format, lint, test, coverage and run stages."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from devflow.core.models import PipelineState, ToolResult
from devflow.core.reporter import Reporter
from devflow.core.toolchain import Toolchain
from devflow.utils.paths import derive_test_file, discover_sources


class Runner(Protocol):
    def capture(self, argv: Sequence[str]) -> ToolResult: ...

    def stream(self, argv: Sequence[str]) -> int: ...


def run_formatter(
    sources: Sequence[Path],
    toolchain: Toolchain,
    runner: Runner,
    reporter: Reporter,
    state: PipelineState,
) -> PipelineState:
    """Format each source in place and remember the last existing test file."""
    for source in sources:
        reporter.info(f"Formatting {source.name}")
        result = runner.capture(toolchain.format_command(source))
        if result.stderr:
            reporter.warn(result.stderr.rstrip())

        candidate = derive_test_file(source, toolchain.test_suffix)
        if candidate.exists():
            state = state.with_test_file(candidate)
            reporter.info(f"Found test file {candidate.name}")
        reporter.info(f"Formatted {source.name}")
    return state


def run_linter(
    toolchain: Toolchain,
    runner: Runner,
    reporter: Reporter,
    state: PipelineState,
    verbose: bool = False,
) -> PipelineState:
    """Lint the working directory; any linter stdout counts as a failure."""
    result = runner.capture(toolchain.lint_command(verbose=verbose))
    if result.stdout:
        reporter.output(result.stdout)
        reporter.error("Lint warnings found")
        return state.fail()
    reporter.success("Lint passed, no warnings")
    return state


def run_tests(
    toolchain: Toolchain,
    runner: Runner,
    reporter: Reporter,
    state: PipelineState,
    verbose: bool = False,
) -> PipelineState:
    """Run the test suite; output carrying any failure marker fails the state."""
    result = runner.capture(toolchain.test_command(verbose=verbose))
    if any(marker in result.output for marker in toolchain.failure_markers):
        reporter.output(result.output)
        reporter.error("Tests failed")
        return state.fail()
    if verbose:
        reporter.output(result.output)
    reporter.success("All tests passed")
    return state


def run_coverage(
    toolchain: Toolchain,
    runner: Runner,
    reporter: Reporter,
    state: PipelineState,
) -> PipelineState:
    """Measure coverage; anything short of the coverage marker is a failure.

    Only the last coverage command (the one that reports the total) is
    searched for the marker.
    """
    outputs = [runner.capture(argv).output for argv in toolchain.coverage_commands()]
    if not outputs or toolchain.coverage_marker not in outputs[-1]:
        reporter.output("".join(outputs))
        runner.capture(toolchain.coverage_html_command())
        reporter.info(f"Coverage report generated from {toolchain.coverage_profile}")
        reporter.error("Test coverage is below 100%")
        return state.fail()
    reporter.success("100% test coverage")
    return state


def run_program(toolchain: Toolchain, runner: Runner, reporter: Reporter) -> int:
    """Run the main program with output passed straight through."""
    reporter.info(f"Running {toolchain.main_file}")
    return runner.stream(toolchain.run_command())


def run_pipeline(
    toolchain: Toolchain,
    runner: Runner,
    reporter: Reporter,
    directory: Optional[Path] = None,
) -> PipelineState:
    """Run format, lint, test and coverage, then the program if all passed."""
    cwd = directory or Path.cwd()
    sources: List[Path] = discover_sources(cwd, toolchain.source_glob)
    state = PipelineState()

    reporter.divider("Format")
    state = run_formatter(sources, toolchain, runner, reporter, state)

    reporter.divider("Lint")
    if not sources:
        reporter.warn(f"No {toolchain.source_glob} files found in {cwd}")
        state = state.fail()
    else:
        state = run_linter(toolchain, runner, reporter, state)

    reporter.divider("Test")
    test_file = state.discovered_test_file
    if sources and test_file is not None and test_file.exists():
        state = run_tests(toolchain, runner, reporter, state)
        state = run_coverage(toolchain, runner, reporter, state)
    elif sources:
        reporter.warn("No test file found, skipping tests")
    else:
        reporter.warn("No source files, skipping tests")

    reporter.divider("Run")
    if state.all_passed:
        reporter.success("All checks passed")
        run_program(toolchain, runner, reporter)
    else:
        reporter.error(f"Checks failed, not running {toolchain.main_file}")
    return state


def run_single_action(
    action: str,
    toolchain: Toolchain,
    runner: Runner,
    reporter: Reporter,
    verbose: bool = False,
) -> PipelineState:
    """Run exactly one of lint, test or run in isolation."""
    state = PipelineState()
    if action == "lint":
        return run_linter(toolchain, runner, reporter, state, verbose=verbose)
    if action == "test":
        return run_tests(toolchain, runner, reporter, state, verbose=verbose)
    if action == "run":
        run_program(toolchain, runner, reporter)
        return state
    raise ValueError(f"Unknown action: {action}")
