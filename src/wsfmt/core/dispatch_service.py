"""Core dispatch service — orchestrates the resolve/provision/run pipeline.

The service delegates every side effect to collaborators injected at
construction time (see :mod:`wsfmt.core.protocols`).  It is responsible
for:

* Running the steps in an order where every fatal check happens before
  anything is executed.
* Building the ruff invocation.
* Returning ruff's verdict as an :class:`ExecutionResult`.

Guarantees
----------
* Pure orchestration — no ``print()``; the only filesystem access is
  resolving the caller's ``cwd``.
* A :class:`~wsfmt.exceptions.WsfmtError` raised by any step aborts the
  pipeline; the runner is never reached.
"""

from __future__ import annotations

import logging
from pathlib import Path

from wsfmt.core.invocation import build_invocation
from wsfmt.core.models import DispatchRequest, ExecutionResult, InvocationSpec
from wsfmt.core.output_mode import resolve_output_mode
from wsfmt.core.protocols import CommandRunner, DescriptorLoader, EnvironmentProvisioner
from wsfmt.core.selection import select_projects

logger = logging.getLogger(__name__)


class DispatchService:
    """Stateless service that drives one ruff dispatch.

    Parameters
    ----------
    loader:
        Any object satisfying :class:`DescriptorLoader`.
    provisioner:
        Any object satisfying :class:`EnvironmentProvisioner`.
    runner:
        Any object satisfying :class:`CommandRunner`.
    """

    def __init__(
        self,
        loader: DescriptorLoader,
        provisioner: EnvironmentProvisioner,
        runner: CommandRunner,
    ) -> None:
        self._loader: DescriptorLoader = loader
        self._provisioner: EnvironmentProvisioner = provisioner
        self._runner: CommandRunner = runner

    def prepare(self, request: DispatchRequest, *, cwd: Path) -> InvocationSpec:
        """Resolve everything needed to run ruff, without running it.

        Selection happens before provisioning so that a bad ``--package``
        never triggers a tool bootstrap.  *cwd* is resolved once so that
        discovery and default selection compare the same physical path.
        """
        cwd = cwd.resolve()
        descriptor = self._loader.load_or_discover(request.pyproject, cwd)
        logger.debug("Using descriptor %s", descriptor.path)

        output_mode = resolve_output_mode(request.quiet, request.verbose)
        selection = request.selection
        projects = select_projects(
            descriptor,
            selection.select_all,
            selection.names,
            cwd=cwd,
        )
        if not projects:
            logger.warning("No projects selected; ruff will receive no paths.")

        env_root = self._provisioner.ensure(output_mode)
        return build_invocation(
            env_root,
            request.verb,
            output_mode,
            request.mode_flags,
            request.extra_args,
            projects,
        )

    def dispatch(self, request: DispatchRequest, *, cwd: Path) -> ExecutionResult:
        """Prepare and run ruff, returning its outcome.

        Raises
        ------
        WsfmtError
            Any resolution, provisioning or launch failure.  A ruff run
            that exits nonzero is *not* raised; it is returned.
        """
        spec = self.prepare(request, cwd=cwd)
        logger.debug("Running: %s", " ".join(spec.argv))
        result = self._runner.run(spec)
        if not result.ok:
            logger.debug("ruff exited with code %d", result.exit_code)
        return result
