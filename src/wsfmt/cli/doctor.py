"""``wsfmt doctor`` — environment diagnostics command.

Gathers system information and renders a table summarising whether the
runtime environment satisfies wsfmt's requirements.  Nothing is
provisioned here; the tool environment is only inspected.

This module lives in the CLI layer — it may import from ``infra`` and
``core``, and it renders via Rich when available.
"""

from __future__ import annotations

import platform
import sys

from wsfmt.cli import exit_codes
from wsfmt.cli.console import console, escape
from wsfmt.core.invocation import tool_executable
from wsfmt.exceptions import DiscoveryError
from wsfmt.infra.pyproject_loader import load_or_discover
from wsfmt.infra.settings import Settings
from wsfmt.infra.tool_env import ToolEnvironment
from wsfmt.version import __version__

MIN_PYTHON: tuple[int, int] = (3, 11)


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = tuple(sys.version_info[:2]) >= MIN_PYTHON
    required = ".".join(str(part) for part in MIN_PYTHON)
    status = "[green]OK[/green]" if ok else f"[red]FAIL (>={required} required)[/red]"
    return "Python", version, status


def _tool_env_check(settings: Settings) -> tuple[str, str, str]:
    """Return (label, value, status) for the tool environment row."""
    env = ToolEnvironment(settings)
    if env.is_ready():
        return "tool env", str(env.env_dir), "[green]OK[/green]"
    return "tool env", "not provisioned", "[yellow]WARN[/yellow]"


def _ruff_check(settings: Settings) -> tuple[str, str, str]:
    """Return (label, value, status) for the ruff binary row."""
    binary = tool_executable(settings.tool_env_dir)
    if binary.is_file():
        return "ruff", settings.ruff_requirement, "[green]OK[/green]"
    return "ruff", f"{settings.ruff_requirement} (not installed)", "[yellow]WARN[/yellow]"


def _project_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the project descriptor row."""
    try:
        descriptor = load_or_discover(None)
    except DiscoveryError:
        return "project", "no pyproject.toml found", "[yellow]WARN[/yellow]"
    kind = "workspace" if descriptor.is_workspace else "project"
    value = f"{descriptor.path} ({kind}, {len(descriptor)} project(s))"
    return "project", value, "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _wsfmt_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the wsfmt version row."""
    return "wsfmt", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nwsfmt doctor", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<48} {'Status':<8}", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<48} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    from rich.table import Table

    table = Table(
        title="wsfmt doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape(value), status)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check FAILs,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  WARN rows (tool
        environment not yet bootstrapped, no project in the cwd) do not
        fail the command.
    """
    settings = Settings.from_env()
    checks = [
        _wsfmt_version_check(),
        _python_version_check(),
        _tool_env_check(settings),
        _ruff_check(settings),
        _project_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)
    env_ready = ToolEnvironment(settings).is_ready()

    try:
        _print_rich_doctor_table(checks)
        rich_available = True
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        rich_available = False

    if not env_ready:
        message = (
            "The ruff tool environment is bootstrapped automatically on the "
            f"first 'wsfmt fmt' or 'wsfmt lint' (into {settings.tool_env_dir})."
        )
        if rich_available:
            console.print(f"[yellow]{escape(message)}[/yellow]\n")
        else:
            print(message + "\n", file=sys.stderr)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
