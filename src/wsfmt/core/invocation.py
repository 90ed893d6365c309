"""ruff command-line construction (pure).

Argument order is fixed and must not change::

    <env>/bin/ruff  VERB  [--verbose|-q]  [MODE FLAGS]  [EXTRA ARGS]  --  PATH...

ruff treats everything after ``--`` as a path, so user-supplied extra
arguments always precede the separator.  Extra arguments are forwarded
verbatim and never validated: ruff owns the meaning of its own flags.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from wsfmt.core.models import InvocationSpec, OutputMode, SubProject

FORMAT_VERB: str = "format"
LINT_VERB: str = "check"

CHECK_FLAG: str = "--check"
FIX_FLAG: str = "--fix"

PATH_SEPARATOR: str = "--"

VENV_BIN: str = "Scripts" if os.name == "nt" else "bin"
TOOL_NAME: str = "ruff.exe" if os.name == "nt" else "ruff"

_OUTPUT_MODE_FLAGS: dict[OutputMode, tuple[str, ...]] = {
    OutputMode.NORMAL: (),
    OutputMode.VERBOSE: ("--verbose",),
    OutputMode.QUIET: ("-q",),
}


def tool_executable(env_root: Path) -> Path:
    """Return the ruff binary location inside the environment at *env_root*."""
    return env_root / VENV_BIN / TOOL_NAME


def build_invocation(
    env_root: Path,
    verb: str,
    output_mode: OutputMode,
    mode_flags: Iterable[str],
    extra_args: Sequence[str],
    projects: Sequence[SubProject],
) -> InvocationSpec:
    """Assemble the ruff invocation for *projects*.

    Parameters
    ----------
    env_root:
        Root of the provisioned tool environment.
    verb:
        ruff sub-command, e.g. :data:`FORMAT_VERB`.
    output_mode:
        Resolved verbosity; ``NORMAL`` adds no flag.
    mode_flags:
        Operation-mode flags requested by the command.  Each flag is
        emitted once, in first-seen order.
    extra_args:
        Opaque pass-through arguments.
    projects:
        Selected projects; one root path is appended per project.
    """
    args: list[str] = [verb]
    args.extend(_OUTPUT_MODE_FLAGS[output_mode])
    args.extend(dict.fromkeys(mode_flags))
    args.extend(extra_args)
    args.append(PATH_SEPARATOR)
    args.extend(str(project.root) for project in projects)
    return InvocationSpec(executable=tool_executable(env_root), args=tuple(args))
