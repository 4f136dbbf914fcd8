"""Static constants: built-in toolchains, color palettes and flag names."""

from __future__ import annotations

ACTION_FLAGS = ("lint", "test", "run")
VERBOSE_FLAG = "verbose"
FLAG_ORDER_KEY = "devflow.flag_order"

DEFAULT_MODE = "dark"
LIGHT_MODE = "light"

THEME_ROLES = ("success", "info", "divider", "error", "warn")

DARK_PALETTE = {
    "success": "bold bright_green",
    "info": "bright_cyan",
    "divider": "bright_white",
    "error": "bold bright_red",
    "warn": "bright_yellow",
}

LIGHT_PALETTE = {
    "success": "bold green4",
    "info": "blue",
    "divider": "grey37",
    "error": "bold red3",
    "warn": "dark_orange3",
}

TOOLCHAIN_FIELDS = (
    "source_glob",
    "test_suffix",
    "main_file",
    "coverage_profile",
    "format",
    "lint",
    "lint_verbose",
    "test",
    "test_verbose",
    "coverage",
    "coverage_html",
    "run",
    "failure_markers",
    "coverage_marker",
)

BUILTIN_TOOLCHAINS = {
    "go": {
        "source_glob": "*.go",
        "test_suffix": "_test",
        "main_file": "main.go",
        "coverage_profile": "coverage.out",
        "format": "gofmt -w {file}",
        "lint": "golint",
        "lint_verbose": "golint -min_confidence=0",
        "test": "go test -race ./...",
        "test_verbose": "go test -race -v ./...",
        "coverage": ["go test -coverprofile={profile} ./..."],
        "coverage_html": "go tool cover -html={profile}",
        "run": "go run {main}",
        "failure_markers": ["FAIL:"],
        "coverage_marker": "100.0",
    },
    "python": {
        "source_glob": "*.py",
        "test_suffix": "_test",
        "main_file": "main.py",
        "coverage_profile": ".coverage",
        "format": "{python} -m black --quiet {file}",
        "lint": "{python} -m ruff check --quiet --output-format=concise .",
        "lint_verbose": "{python} -m ruff check --quiet --output-format=full .",
        "test": "{python} -m pytest -q",
        "test_verbose": "{python} -m pytest -v",
        "coverage": [
            "{python} -m coverage run --data-file={profile} -m pytest -q",
            "{python} -m coverage report --data-file={profile} --format=total --precision=1",
        ],
        "coverage_html": "{python} -m coverage html --data-file={profile}",
        "run": "{python} {main}",
        "failure_markers": ["FAILED", "ERROR"],
        "coverage_marker": "100.0",
    },
}

SHORT_ACTION_FLAGS = {"l": "lint", "t": "test", "r": "run"}
LONG_ACTION_FLAGS = {"--lint": "lint", "--test": "test", "--run": "run"}
LONG_SWITCHES = ("--verbose", "--plain", "--strict", "--legacy-flag-order")
LONG_VALUE_OPTIONS = ("--mode", "--config", "--toolchain")
