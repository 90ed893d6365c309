"""Project selection — which workspace projects a command targets.

Precedence
----------
1. Explicit ``--package`` names: exactly those projects, in the order
   the user gave them.
2. ``--all``: every project in the descriptor's declared order.
3. Neither: the single *default* project.

Default project
---------------
* The project whose root is the deepest directory containing *cwd*.
* Otherwise, when the descriptor has exactly one project, that one.
* Otherwise the choice is ambiguous and an error is raised.

Pure functions — paths are compared, never touched on disk.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from wsfmt.core.models import ProjectDescriptor, SelectionFilter, SubProject
from wsfmt.exceptions import AmbiguousSelectionError, DiscoveryError, UnknownPackageError

logger = logging.getLogger(__name__)


def select_projects(
    descriptor: ProjectDescriptor,
    select_all: bool,
    names: Sequence[str],
    *,
    cwd: Path | None = None,
) -> tuple[SubProject, ...]:
    """Return the ordered projects a command should operate on.

    Parameters
    ----------
    descriptor:
        The loaded root descriptor.
    select_all:
        ``True`` when ``--all`` was passed.
    names:
        Explicit ``--package`` names; duplicates are ignored.
    cwd:
        Invocation directory used to pick the default project.  ``None``
        means "no context" — only a sole project can then be the default.

    Raises
    ------
    UnknownPackageError
        If any explicit name is not registered in *descriptor*.
    AmbiguousSelectionError
        If no filter is given and no single default project exists.
    DiscoveryError
        If no filter is given and *descriptor* has no projects at all.
    """
    selection = SelectionFilter(select_all=select_all, names=tuple(names))

    if selection.names:
        return _select_named(descriptor, selection.names)
    if selection.select_all:
        return descriptor.projects
    return (_default_project(descriptor, cwd),)


def _select_named(
    descriptor: ProjectDescriptor,
    names: tuple[str, ...],
) -> tuple[SubProject, ...]:
    missing = [name for name in names if descriptor.get(name) is None]
    if missing:
        known = ", ".join(p.name for p in descriptor.projects) or "none"
        raise UnknownPackageError(missing, hint=f"Known packages: {known}")
    selected = tuple(p for p in (descriptor.get(name) for name in names) if p is not None)
    logger.debug("Selected by name: %s", ", ".join(p.name for p in selected))
    return selected


def _default_project(descriptor: ProjectDescriptor, cwd: Path | None) -> SubProject:
    if not descriptor.projects:
        raise DiscoveryError(
            f"No projects are registered in {descriptor.path}.",
            hint="Check the [tool.wsfmt.workspace] members patterns.",
        )

    if cwd is not None:
        containing = [p for p in descriptor.projects if cwd.is_relative_to(p.root)]
        if containing:
            # Roots containing one path form a chain; the longest is nearest.
            nearest = max(containing, key=lambda p: len(p.root.parts))
            logger.debug("Default project %s contains %s", nearest.name, cwd)
            return nearest

    if len(descriptor.projects) == 1:
        return descriptor.projects[0]

    raise AmbiguousSelectionError([p.name for p in descriptor.projects])
