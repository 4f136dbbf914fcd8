"""Lightweight value types passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class ToolResult:
    """Captured result of one external tool invocation."""

    argv: Tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        return self.stdout + self.stderr


@dataclass(frozen=True)
class PipelineState:
    """Accumulated pipeline outcome.

    Failure is sticky: there is no way back to ``all_passed=True`` once a
    stage has called :meth:`fail`.
    """

    all_passed: bool = True
    discovered_test_file: Optional[Path] = None

    def fail(self) -> "PipelineState":
        return replace(self, all_passed=False)

    def with_test_file(self, path: Path) -> "PipelineState":
        return replace(self, discovered_test_file=path)
