"""Output-mode resolution from the ``--quiet`` / ``--verbose`` flags."""

from __future__ import annotations

from wsfmt.core.models import OutputMode
from wsfmt.exceptions import OutputModeConflictError


def resolve_output_mode(quiet: bool, verbose: bool) -> OutputMode:
    """Collapse the two verbosity flags into one :class:`OutputMode`.

    argparse already rejects ``-q`` together with ``-v``; the check is
    repeated here for callers that build requests programmatically.
    """
    if quiet and verbose:
        raise OutputModeConflictError(
            "--quiet and --verbose cannot be used together.",
        )
    if quiet:
        return OutputMode.QUIET
    if verbose:
        return OutputMode.VERBOSE
    return OutputMode.NORMAL
