"""Infrastructure: run a built ruff invocation to completion.

The child inherits stdin/stdout/stderr — nothing is captured, so ruff
reports its own diagnostics.  The wait has no timeout and nothing is
retried; Ctrl+C reaches the child through normal signal delivery.
"""

from __future__ import annotations

import logging
import subprocess

from wsfmt.core.models import ExecutionResult, InvocationSpec
from wsfmt.exceptions import LaunchError

logger = logging.getLogger(__name__)


def run_invocation(spec: InvocationSpec) -> ExecutionResult:
    """Run *spec* and map its termination status.

    * ``0`` → success.
    * positive code → failure carrying that code.
    * negative code (POSIX: killed by a signal) → failure carrying
      :data:`~wsfmt.core.models.ABNORMAL_EXIT_CODE`.

    Raises
    ------
    LaunchError
        When the executable is missing or cannot be executed.
    """
    try:
        completed = subprocess.run(spec.argv, check=False)
    except FileNotFoundError as exc:
        raise LaunchError(
            f"ruff executable not found: {spec.executable}",
            hint="The tool environment may be damaged; delete it and retry.",
        ) from exc
    except OSError as exc:
        raise LaunchError(f"Could not start {spec.executable}: {exc}") from exc

    code = completed.returncode
    if code == 0:
        return ExecutionResult.success()
    if code < 0:
        logger.debug("ruff terminated by signal %d", -code)
    return ExecutionResult.failure(code)


class SubprocessRunner:
    """Concrete :class:`~wsfmt.core.protocols.CommandRunner`."""

    def run(self, spec: InvocationSpec) -> ExecutionResult:
        return run_invocation(spec)
