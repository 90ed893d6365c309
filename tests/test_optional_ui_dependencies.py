"""Regression tests for the optional Rich dependency.

wsfmt must keep working when Rich is missing: bootstrap commands,
dispatch and the error boundary fall back to plain stderr output.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from conftest import FakeLoader, FakeProvisioner, FakeRunner
from wsfmt.cli import app as app_module
from wsfmt.cli import exit_codes
from wsfmt.cli.app import cli, main
from wsfmt.cli.console import configure_logging, console, escape
from wsfmt.core.dispatch_service import DispatchService
from wsfmt.core.models import OutputMode, ProjectDescriptor, SubProject
from wsfmt.exceptions import AmbiguousSelectionError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def _single() -> ProjectDescriptor:
    root = Path("/proj")
    return ProjectDescriptor(path=root / "pyproject.toml", root=root, projects=(SubProject("proj", root),))


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_doctor_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    code = main(["doctor"])
    assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)


def test_dispatch_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    runner = FakeRunner()
    service = DispatchService(FakeLoader(_single()), FakeProvisioner(Path("/env")), runner)
    monkeypatch.setattr(app_module, "_build_service", lambda: service)

    assert main(["fmt", "-v"]) == exit_codes.SUCCESS
    assert runner.specs[0].args[:2] == ("format", "--verbose")


def test_error_boundary_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    def _boom() -> int:
        raise AmbiguousSelectionError(["core", "cli"])

    monkeypatch.setattr(app_module, "main", _boom)
    with pytest.raises(SystemExit) as exc_info:
        cli()

    assert exc_info.value.code == exit_codes.GENERAL_ERROR
    err = capsys.readouterr().err
    assert "Cannot determine which project" in err
    assert "--package" in err


def test_console_falls_back_to_plain_stderr(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    console.print("plain text")
    assert capsys.readouterr().err == "plain text\n"


def test_escape_is_identity_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    assert escape("[tool.wsfmt]") == "[tool.wsfmt]"


def test_logging_falls_back_to_stream_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    logger = configure_logging(OutputMode.QUIET)

    assert logger.name == "wsfmt"
    assert logger.level == logging.ERROR
    assert len(logger.handlers) == 1
    assert type(logger.handlers[0]) is logging.StreamHandler


@pytest.mark.parametrize(
    ("mode", "level"),
    [
        (OutputMode.NORMAL, logging.INFO),
        (OutputMode.VERBOSE, logging.DEBUG),
        (OutputMode.QUIET, logging.ERROR),
    ],
)
def test_logging_levels_follow_output_mode(mode: OutputMode, level: int) -> None:
    logger = configure_logging(mode)
    assert logger.level == level
    assert len(logger.handlers) == 1
