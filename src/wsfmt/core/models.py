"""Domain models for wsfmt.

All models are **frozen** dataclasses — immutable value objects built
fresh for every command and never shared across invocations.  They carry
zero I/O and no third-party dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


ABNORMAL_EXIT_CODE: int = 1
"""Exit code reported when ruff terminated without one (e.g. killed by a signal)."""


# ---------------------------------------------------------------------------
# Output mode
# ---------------------------------------------------------------------------

class OutputMode(str, Enum):
    """Tri-state verbosity forwarded to ruff and to wsfmt's own logging."""

    NORMAL = "normal"
    VERBOSE = "verbose"
    QUIET = "quiet"


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SubProject:
    """A named, path-addressable project inside a workspace."""

    name: str
    """Project name, unique within its descriptor."""

    root: Path
    """Directory holding the project's ``pyproject.toml``."""


@dataclass(frozen=True, slots=True)
class ProjectDescriptor:
    """The root ``pyproject.toml`` a command runs against.

    For a plain project ``projects`` holds exactly one entry (the project
    itself).  For a workspace it holds the root (when the root is itself
    a project) followed by the members in declared order.
    """

    path: Path
    """Resolved path of the descriptor file; the descriptor's identity."""

    root: Path
    """Directory containing :attr:`path`."""

    projects: tuple[SubProject, ...]
    is_workspace: bool = False

    def __len__(self) -> int:
        return len(self.projects)

    def get(self, name: str) -> SubProject | None:
        """Return the project registered under exactly *name*, if any."""
        return next((p for p in self.projects if p.name == name), None)


@dataclass(frozen=True, slots=True)
class SelectionFilter:
    """User-supplied project filters.

    ``names`` is an ordered set: duplicates collapse onto their first
    occurrence.  Explicit names take precedence over ``select_all``.
    """

    select_all: bool = False
    names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(dict.fromkeys(self.names)))


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DispatchRequest:
    """Already-parsed command options handed to the dispatch pipeline."""

    verb: str
    """ruff sub-command (``format`` or ``check``)."""

    mode_flags: tuple[str, ...] = ()
    """Operation-mode flags such as ``--check`` or ``--fix``."""

    select_all: bool = False
    package_names: tuple[str, ...] = ()
    pyproject: Path | None = None
    verbose: bool = False
    quiet: bool = False
    extra_args: tuple[str, ...] = ()

    @property
    def selection(self) -> SelectionFilter:
        return SelectionFilter(select_all=self.select_all, names=self.package_names)


@dataclass(frozen=True, slots=True)
class InvocationSpec:
    """A fully-built ruff command line."""

    executable: Path
    args: tuple[str, ...] = field(default_factory=tuple)

    @property
    def argv(self) -> list[str]:
        """Return the complete argument vector, executable first."""
        return [str(self.executable), *self.args]


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of a completed ruff run.

    Use :meth:`success` / :meth:`failure` rather than the constructor.
    """

    exit_code: int

    @classmethod
    def success(cls) -> ExecutionResult:
        return cls(exit_code=0)

    @classmethod
    def failure(cls, code: int | None) -> ExecutionResult:
        """Build a failure, substituting :data:`ABNORMAL_EXIT_CODE` when
        no usable code was reported."""
        if code is None or code <= 0:
            code = ABNORMAL_EXIT_CODE
        return cls(exit_code=code)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def __bool__(self) -> bool:
        return self.ok
