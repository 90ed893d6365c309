"""Shared pytest fixtures and configuration for the wsfmt test suite.

Guidelines
----------
* No network access and no real ruff in any test.
* ``subprocess`` and ``venv`` are mocked at the infra boundary.
* Core tests must be pure — no side effects.
* On-disk workspaces are built under ``tmp_path``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from wsfmt.core.models import ExecutionResult, InvocationSpec, OutputMode, ProjectDescriptor


PyprojectWriter = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``WSFMT_HOME`` at a throwaway directory for every test."""
    home = tmp_path / "wsfmt-home"
    monkeypatch.setenv("WSFMT_HOME", str(home))
    monkeypatch.delenv("WSFMT_RUFF_REQUIREMENT", raising=False)
    return home


@pytest.fixture(autouse=True)
def _reset_wsfmt_logger() -> Iterator[None]:
    """Drop handlers ``configure_logging`` attached during a test."""
    yield
    logger = logging.getLogger("wsfmt")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def write_pyproject() -> PyprojectWriter:
    """Return a helper that writes ``<directory>/pyproject.toml``."""

    def _write(
        directory: Path,
        name: str | None = None,
        *,
        members: list[str] | None = None,
        workspace: bool = False,
        extra: str = "",
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        lines: list[str] = []
        if name is not None:
            lines += ["[project]", f'name = "{name}"', ""]
        if workspace or members is not None:
            lines.append("[tool.wsfmt.workspace]")
            if members is not None:
                quoted = ", ".join(f'"{m}"' for m in members)
                lines.append(f"members = [{quoted}]")
            lines.append("")
        if extra:
            lines.append(extra)
        path = directory / "pyproject.toml"
        path.write_text("\n".join(lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def core_cli_workspace(tmp_path: Path, write_pyproject: PyprojectWriter) -> Path:
    """Virtual workspace with members ``core`` and ``cli`` under ``packages/``."""
    root = tmp_path / "ws"
    write_pyproject(root, members=["packages/*"])
    write_pyproject(root / "packages" / "core", "core")
    write_pyproject(root / "packages" / "cli", "cli")
    return root


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------

class FakeLoader:
    def __init__(self, descriptor: ProjectDescriptor) -> None:
        self.descriptor = descriptor
        self.calls: list[tuple[Path | None, Path | None]] = []

    def load_or_discover(self, path: Path | None, cwd: Path | None = None) -> ProjectDescriptor:
        self.calls.append((path, cwd))
        return self.descriptor


class FakeProvisioner:
    def __init__(self, env_root: Path) -> None:
        self.env_root = env_root
        self.modes: list[OutputMode] = []

    def ensure(self, output_mode: OutputMode) -> Path:
        self.modes.append(output_mode)
        return self.env_root


class FakeRunner:
    def __init__(self, result: ExecutionResult | None = None) -> None:
        self.result = result if result is not None else ExecutionResult.success()
        self.specs: list[InvocationSpec] = []

    def run(self, spec: InvocationSpec) -> ExecutionResult:
        self.specs.append(spec)
        return self.result
