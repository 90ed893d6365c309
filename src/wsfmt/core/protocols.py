"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the dispatch pipeline can be driven by fakes in
tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from wsfmt.core.models import ExecutionResult, InvocationSpec, OutputMode, ProjectDescriptor


class DescriptorLoader(Protocol):
    """Contract for locating and loading the root ``pyproject.toml``."""

    def load_or_discover(
        self,
        path: Path | None,
        cwd: Path | None = None,
    ) -> ProjectDescriptor:
        """Load *path*, or search upward from *cwd* when *path* is ``None``.

        Raises
        ------
        DiscoveryError
            When no valid descriptor can be found or loaded.
        """
        ...  # pragma: no cover


class EnvironmentProvisioner(Protocol):
    """Contract for the isolated tool environment."""

    def ensure(self, output_mode: OutputMode) -> Path:
        """Return the environment root, creating it first if needed.

        Must be idempotent: an already-provisioned environment is
        returned without side effects.

        Raises
        ------
        ProvisioningError
            When the environment cannot be created.
        """
        ...  # pragma: no cover


class CommandRunner(Protocol):
    """Contract for running a built invocation to completion."""

    def run(self, spec: InvocationSpec) -> ExecutionResult:
        """Run *spec* with inherited streams and block until it exits.

        Raises
        ------
        LaunchError
            When the executable cannot be started.
        """
        ...  # pragma: no cover
