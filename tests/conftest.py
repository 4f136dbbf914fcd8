from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pytest
from rich.console import Console
from typer.testing import CliRunner

from devflow.core.config import load_config
from devflow.core.models import ToolResult
from devflow.core.reporter import Reporter
from devflow.core.toolchain import Toolchain, resolve_toolchain
from devflow.utils.theme import select_theme


class FakeRunner:
    """Records tool invocations and answers with scripted output by command prefix."""

    def __init__(
        self,
        outputs: Optional[Dict[str, Union[str, ToolResult]]] = None,
        stream_code: int = 0,
    ) -> None:
        self.outputs = dict(outputs or {})
        self.stream_code = stream_code
        self.calls: List[Tuple[str, List[str]]] = []

    def capture(self, argv: Sequence[str]) -> ToolResult:
        args = list(argv)
        self.calls.append(("capture", args))
        line = " ".join(args)
        for prefix, scripted in self.outputs.items():
            if line.startswith(prefix):
                if isinstance(scripted, ToolResult):
                    return scripted
                return ToolResult(argv=tuple(args), returncode=0, stdout=scripted)
        return ToolResult(argv=tuple(args), returncode=0)

    def stream(self, argv: Sequence[str]) -> int:
        self.calls.append(("stream", list(argv)))
        return self.stream_code

    def commands(self) -> List[str]:
        return [" ".join(args) for _, args in self.calls]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEVFLOW_CONFIG_FILE", str(tmp_path / "no-such-config.toml"))
    monkeypatch.delenv("DEVFLOW_TOOLCHAIN", raising=False)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def make_runner():
    def _make(outputs: Optional[Dict[str, Union[str, ToolResult]]] = None, stream_code: int = 0) -> FakeRunner:
        return FakeRunner(outputs, stream_code=stream_code)

    return _make


@pytest.fixture()
def go_toolchain() -> Toolchain:
    return resolve_toolchain(load_config(), "go")


@pytest.fixture()
def python_toolchain() -> Toolchain:
    return resolve_toolchain(load_config(), "python")


@pytest.fixture()
def console() -> Console:
    return Console(file=io.StringIO(), record=True, theme=select_theme("dark"), width=200)


@pytest.fixture()
def reporter(console: Console) -> Reporter:
    return Reporter(console)


@pytest.fixture()
def go_project(tmp_path: Path):
    def _make(*names: str) -> Path:
        project = tmp_path / "project"
        project.mkdir(exist_ok=True)
        for name in names:
            (project / name).write_text("package main\n")
        return project

    return _make


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
