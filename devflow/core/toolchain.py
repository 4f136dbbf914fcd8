"""Toolchain profiles: which external tools run for each stage."""

from __future__ import annotations

import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from devflow.core.config import ConfigError
from devflow.core.constants import BUILTIN_TOOLCHAINS, TOOLCHAIN_FIELDS


@dataclass(frozen=True)
class Toolchain:
    """Command templates and output markers for one language toolchain."""

    name: str
    source_glob: str
    test_suffix: str
    main_file: str
    coverage_profile: str
    format: str
    lint: str
    lint_verbose: str
    test: str
    test_verbose: str
    coverage: Tuple[str, ...]
    coverage_html: str
    run: str
    failure_markers: Tuple[str, ...]
    coverage_marker: str

    def expand(self, template: str, file: Optional[Path] = None) -> List[str]:
        """Split a command template and fill in placeholders token by token."""
        values = {
            "file": str(file) if file is not None else "",
            "profile": self.coverage_profile,
            "main": self.main_file,
            "python": sys.executable,
        }
        try:
            return [token.format(**values) for token in shlex.split(template)]
        except (KeyError, IndexError, ValueError) as exc:
            raise ConfigError(
                f"Invalid command template for toolchain '{self.name}': {template!r} ({exc})"
            ) from exc

    def format_command(self, file: Path) -> List[str]:
        return self.expand(self.format, file=file)

    def lint_command(self, verbose: bool = False) -> List[str]:
        return self.expand(self.lint_verbose if verbose else self.lint)

    def test_command(self, verbose: bool = False) -> List[str]:
        return self.expand(self.test_verbose if verbose else self.test)

    def coverage_commands(self) -> List[List[str]]:
        return [self.expand(template) for template in self.coverage]

    def coverage_html_command(self) -> List[str]:
        return self.expand(self.coverage_html)

    def run_command(self) -> List[str]:
        return self.expand(self.run)


def available_toolchains(config: Dict[str, Any]) -> List[str]:
    names = set(BUILTIN_TOOLCHAINS) | set(config.get("toolchains", {}))
    return sorted(names)


def _string_list(selected: str, field: str, value: Any) -> Tuple[str, ...]:
    """Accept a string or a non-empty list of strings."""
    items = [value] if isinstance(value, str) else value
    if not isinstance(items, (list, tuple)) or not items or not all(
        isinstance(item, str) and item for item in items
    ):
        raise ConfigError(
            f"Toolchain '{selected}' field '{field}' must be a string or a list of strings"
        )
    return tuple(items)


def resolve_toolchain(config: Dict[str, Any], name: Optional[str] = None) -> Toolchain:
    """Build a Toolchain from built-in defaults plus config overrides."""
    selected = name or config.get("toolchain", "go")
    if not isinstance(selected, str):
        raise ConfigError("'toolchain' must be a string")
    base = BUILTIN_TOOLCHAINS.get(selected, {})
    override = config.get("toolchains", {}).get(selected, {})

    if not base and not override:
        known = ", ".join(available_toolchains(config))
        raise ConfigError(f"Unknown toolchain '{selected}' (known: {known})")
    if not isinstance(override, dict):
        raise ConfigError(f"Toolchain override for '{selected}' must be a table")

    merged: Dict[str, Any] = {**base, **override}
    unknown = sorted(set(merged) - set(TOOLCHAIN_FIELDS))
    if unknown:
        raise ConfigError(f"Unknown toolchain fields for '{selected}': {', '.join(unknown)}")
    missing = [field for field in TOOLCHAIN_FIELDS if not merged.get(field)]
    if missing:
        raise ConfigError(f"Toolchain '{selected}' is missing fields: {', '.join(missing)}")

    list_fields = ("coverage", "failure_markers")
    for field in TOOLCHAIN_FIELDS:
        if field not in list_fields and not isinstance(merged[field], str):
            raise ConfigError(f"Toolchain '{selected}' field '{field}' must be a string")

    return Toolchain(
        name=selected,
        source_glob=merged["source_glob"],
        test_suffix=merged["test_suffix"],
        main_file=merged["main_file"],
        coverage_profile=merged["coverage_profile"],
        format=merged["format"],
        lint=merged["lint"],
        lint_verbose=merged["lint_verbose"],
        test=merged["test"],
        test_verbose=merged["test_verbose"],
        coverage=_string_list(selected, "coverage", merged["coverage"]),
        coverage_html=merged["coverage_html"],
        run=merged["run"],
        failure_markers=_string_list(selected, "failure_markers", merged["failure_markers"]),
        coverage_marker=merged["coverage_marker"],
    )
