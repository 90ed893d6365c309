"""CLI application entry point and command routing for wsfmt.

This module is the **sole error boundary** for the entire application.
It catches :class:`~wsfmt.exceptions.WsfmtError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; the console proxy is
  used exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.  A failing ruff run is not an error: its
  own exit code is returned unchanged.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from wsfmt.cli import exit_codes
from wsfmt.cli.console import configure_logging, console, escape
from wsfmt.core.dispatch_service import DispatchService
from wsfmt.core.invocation import CHECK_FLAG, FIX_FLAG, FORMAT_VERB, LINT_VERB
from wsfmt.core.models import DispatchRequest
from wsfmt.core.output_mode import resolve_output_mode
from wsfmt.exceptions import WsfmtError
from wsfmt.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_dispatch_arguments(parser: argparse.ArgumentParser, noun: str) -> None:
    """Register the options shared by ``fmt`` and ``lint``."""
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help=f"{noun} all packages",
    )
    parser.add_argument(
        "-p",
        "--package",
        action="append",
        default=[],
        metavar="NAME",
        help=f"{noun} a specific package (repeatable)",
    )
    parser.add_argument(
        "--pyproject",
        type=Path,
        default=None,
        metavar="PYPROJECT_TOML",
        help="Use this pyproject.toml file",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enables verbose diagnostics.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Turns off all output.",
    )


def _add_extra_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "extra_args",
        nargs=argparse.REMAINDER,
        help="Extra arguments passed to ruff verbatim (put them after --).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``wsfmt fmt``    — ``ruff format`` over the selected projects
    * ``wsfmt lint``   — ``ruff check`` over the selected projects
    * ``wsfmt doctor`` — environment diagnostics
    * ``wsfmt --version``
    """
    parser = argparse.ArgumentParser(
        prog="wsfmt",
        description="Run ruff across the projects of a Python workspace.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    fmt = commands.add_parser(
        "fmt",
        help="Run the code formatter on the project.",
        description="Run the code formatter on the project. "
        "This invokes ruff in format mode.",
    )
    _add_dispatch_arguments(fmt, "Format")
    fmt.add_argument(
        "--check",
        action="store_true",
        help="Run format in check mode",
    )
    _add_extra_arguments(fmt)

    lint = commands.add_parser(
        "lint",
        help="Run the linter on the project.",
        description="Run the linter on the project. This invokes ruff in check mode.",
    )
    _add_dispatch_arguments(lint, "Lint")
    lint.add_argument(
        "--fix",
        action="store_true",
        help="Apply automatic fixes",
    )
    _add_extra_arguments(lint)

    commands.add_parser(
        "doctor",
        help="Check the environment wsfmt runs in.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _strip_separator(extra_args: Sequence[str]) -> tuple[str, ...]:
    """Drop the leading ``--`` argparse leaves in front of REMAINDER values."""
    args = tuple(extra_args)
    if args and args[0] == "--":
        return args[1:]
    return args


def _request_from_args(args: argparse.Namespace) -> DispatchRequest:
    if args.command == "fmt":
        verb = FORMAT_VERB
        mode_flags = (CHECK_FLAG,) if args.check else ()
    else:
        verb = LINT_VERB
        mode_flags = (FIX_FLAG,) if args.fix else ()

    return DispatchRequest(
        verb=verb,
        mode_flags=mode_flags,
        select_all=args.all,
        package_names=tuple(args.package),
        pyproject=args.pyproject,
        verbose=args.verbose,
        quiet=args.quiet,
        extra_args=_strip_separator(args.extra_args),
    )


def _build_service() -> DispatchService:
    """Wire the production collaborators into a :class:`DispatchService`."""
    from wsfmt.infra.process_runner import SubprocessRunner
    from wsfmt.infra.pyproject_loader import PyProjectLoader
    from wsfmt.infra.tool_env import ToolEnvironment

    return DispatchService(PyProjectLoader(), ToolEnvironment(), SubprocessRunner())


def _handle_dispatch(args: argparse.Namespace) -> int:
    """Run ``fmt`` / ``lint`` and return ruff's exit code."""
    request = _request_from_args(args)
    configure_logging(resolve_output_mode(request.quiet, request.verbose))

    result = _build_service().dispatch(request, cwd=Path.cwd())
    return result.exit_code


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from wsfmt.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the wsfmt CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor()

    return _handle_dispatch(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except WsfmtError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
