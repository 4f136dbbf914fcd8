"""Source enumeration and test file naming helpers."""

from __future__ import annotations

from pathlib import Path
from typing import List


def discover_sources(directory: Path, pattern: str) -> List[Path]:
    """List files in ``directory`` matching ``pattern``, sorted by name."""
    return sorted(path for path in directory.glob(pattern) if path.is_file())


def derive_test_file(source: Path, suffix: str) -> Path:
    """Derive the conventional test file name, e.g. ``foo.go`` -> ``foo_test.go``."""
    return source.with_name(f"{source.stem}{suffix}{source.suffix}")
