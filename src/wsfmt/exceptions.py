"""Custom exception hierarchy for wsfmt.

All exceptions that cross layer boundaries must inherit from
:class:`WsfmtError`.  Raw ``OSError`` / ``subprocess`` / ``tomllib``
exceptions must NEVER propagate beyond the infrastructure layer — they
are caught there and re-raised as a typed subclass defined here.

A ruff run that merely *fails* (nonzero exit) is not an exception; it
travels back as an :class:`~wsfmt.core.models.ExecutionResult`.

Hierarchy
---------
WsfmtError
├── DiscoveryError
├── UnknownPackageError
├── AmbiguousSelectionError
├── OutputModeConflictError
├── EnvironmentError
│   └── ProvisioningError
└── LaunchError
"""

from __future__ import annotations

from collections.abc import Sequence


class WsfmtError(Exception):
    """Base exception for all wsfmt errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Project resolution ----------------------------------------------------

class DiscoveryError(WsfmtError):
    """Raised when no valid ``pyproject.toml`` can be found or loaded."""


class UnknownPackageError(WsfmtError):
    """Raised when a ``--package`` filter names no project in the workspace."""

    def __init__(self, names: Sequence[str], *, hint: str | None = None) -> None:
        self.names: tuple[str, ...] = tuple(names)
        quoted = ", ".join(repr(name) for name in self.names)
        noun = "package" if len(self.names) == 1 else "packages"
        super().__init__(f"Unknown {noun}: {quoted}", hint=hint)


class AmbiguousSelectionError(WsfmtError):
    """Raised when no single default project can be chosen."""

    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates: tuple[str, ...] = tuple(candidates)
        super().__init__(
            "Cannot determine which project to target "
            f"({len(self.candidates)} candidates: {', '.join(self.candidates)}).",
            hint="Pass --package NAME to pick one, or --all for every project.",
        )


class OutputModeConflictError(WsfmtError):
    """Raised when both ``--quiet`` and ``--verbose`` are requested."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(WsfmtError):
    """Raised when a required runtime dependency is not available."""


class ProvisioningError(EnvironmentError):
    """Raised when the isolated ruff environment cannot be created."""


class LaunchError(WsfmtError):
    """Raised when the ruff binary cannot be started at all."""
