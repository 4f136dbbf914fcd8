"""External tool execution."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional, Sequence

from devflow.core.models import ToolResult


class ToolNotFoundError(RuntimeError):
    """Raised when an external tool executable cannot be found."""


class ToolRunner:
    """Run external tools in a working directory, blocking until they exit."""

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = cwd

    def capture(self, argv: Sequence[str]) -> ToolResult:
        """Run a tool and buffer its stdout and stderr."""
        args = list(argv)
        try:
            completed = subprocess.run(
                args,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(f"Executable not found: {args[0]}") from exc
        return ToolResult(
            argv=tuple(args),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def stream(self, argv: Sequence[str]) -> int:
        """Run a tool attached to the caller's stdout/stderr; return its exit code."""
        args = list(argv)
        try:
            completed = subprocess.run(args, cwd=self.cwd, check=False)
        except FileNotFoundError as exc:
            raise ToolNotFoundError(f"Executable not found: {args[0]}") from exc
        return completed.returncode
