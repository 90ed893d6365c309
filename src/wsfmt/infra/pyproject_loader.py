"""Infrastructure: ``pyproject.toml`` discovery and workspace loading.

This is the only module that reads descriptor files.  Every ``OSError``
and ``tomllib.TOMLDecodeError`` is mapped to
:class:`~wsfmt.exceptions.DiscoveryError` here.

Workspace layout
----------------
A workspace root declares::

    [tool.wsfmt.workspace]
    members = ["packages/*", "apps/*"]   # optional

Without ``members`` every ``pyproject.toml`` below the root is a member
(hidden directories, virtualenvs and build output are skipped).
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from wsfmt.core.models import ProjectDescriptor, SubProject
from wsfmt.exceptions import DiscoveryError

logger = logging.getLogger(__name__)

PYPROJECT: str = "pyproject.toml"

_PRUNED_DIRS: frozenset[str] = frozenset(
    {"__pycache__", "node_modules", "build", "dist", "site-packages"}
)


# ---------------------------------------------------------------------------
# TOML helpers
# ---------------------------------------------------------------------------

def _read_pyproject(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DiscoveryError(f"pyproject.toml not found: {path}") from exc
    except IsADirectoryError as exc:
        raise DiscoveryError(
            f"Expected a pyproject.toml file, got a directory: {path}",
            hint=f"Pass {path / PYPROJECT} instead.",
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise DiscoveryError(f"Failed to parse {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DiscoveryError(f"Cannot read {path}: {exc}") from exc


def _table(data: dict[str, Any], *keys: str) -> dict[str, Any] | None:
    node: Any = data
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, dict) else None


def _project_name(data: dict[str, Any], directory: Path) -> str:
    project = _table(data, "project")
    name = project.get("name") if project is not None else None
    if isinstance(name, str) and name.strip():
        return name.strip()
    return directory.name


def _workspace_table(data: dict[str, Any]) -> dict[str, Any] | None:
    return _table(data, "tool", "wsfmt", "workspace")


# ---------------------------------------------------------------------------
# Workspace members
# ---------------------------------------------------------------------------

def _is_pruned(name: str) -> bool:
    return name.startswith(".") or name in _PRUNED_DIRS


def _walk_member_dirs(root: Path) -> list[Path]:
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        if "pyvenv.cfg" in filenames:
            dirnames[:] = []
            continue
        dirnames[:] = sorted(d for d in dirnames if not _is_pruned(d))
        if current != root and PYPROJECT in filenames:
            found.append(current)
    return sorted(found)


def _glob_member_dirs(root: Path, patterns: list[Any]) -> list[Path]:
    found: list[Path] = []
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise DiscoveryError(
                f"Invalid workspace member pattern {pattern!r} in {root / PYPROJECT}",
                hint="members must be a list of glob strings.",
            )
        try:
            matches = sorted(root.glob(pattern))
        except (NotImplementedError, ValueError) as exc:
            raise DiscoveryError(
                f"Unsupported workspace member pattern {pattern!r}: {exc}",
                hint="Use glob patterns relative to the workspace root.",
            ) from exc
        for match in matches:
            candidate = match.resolve()
            if not (candidate / PYPROJECT).is_file():
                continue
            if not candidate.is_relative_to(root):
                logger.warning("Ignoring member %s outside workspace %s", candidate, root)
                continue
            found.append(candidate)
    return found


def _member_dirs(root: Path, workspace: dict[str, Any]) -> list[Path]:
    members = workspace.get("members")
    if members is None:
        return _walk_member_dirs(root)
    if not isinstance(members, list):
        raise DiscoveryError(
            f"Invalid [tool.wsfmt.workspace].members in {root / PYPROJECT}",
            hint="members must be a list of glob strings.",
        )
    return _glob_member_dirs(root, members)


def _is_member(root: Path, workspace: dict[str, Any], project_dir: Path) -> bool:
    if not project_dir.is_relative_to(root):
        return False
    return project_dir in _member_dirs(root, workspace)


# ---------------------------------------------------------------------------
# Descriptor construction
# ---------------------------------------------------------------------------

def _build_descriptor(path: Path, data: dict[str, Any]) -> ProjectDescriptor:
    root = path.parent
    workspace = _workspace_table(data)

    if workspace is None:
        project = SubProject(name=_project_name(data, root), root=root)
        return ProjectDescriptor(path=path, root=root, projects=(project,))

    projects: list[SubProject] = []
    seen_roots: set[Path] = set()
    if _table(data, "project") is not None:
        projects.append(SubProject(name=_project_name(data, root), root=root))
        seen_roots.add(root)

    for member_dir in _member_dirs(root, workspace):
        if member_dir in seen_roots:
            continue
        seen_roots.add(member_dir)
        member_data = _read_pyproject(member_dir / PYPROJECT)
        projects.append(SubProject(name=_project_name(member_data, member_dir), root=member_dir))

    names: dict[str, Path] = {}
    for project in projects:
        if project.name in names:
            raise DiscoveryError(
                f"Duplicate project name {project.name!r} in workspace {path}",
                hint=f"Both {names[project.name]} and {project.root} use it.",
            )
        names[project.name] = project.root

    logger.debug("Workspace %s has %d project(s)", path, len(projects))
    return ProjectDescriptor(path=path, root=root, projects=tuple(projects), is_workspace=True)


def _find_nearest(start: Path) -> tuple[Path, dict[str, Any]]:
    for directory in (start, *start.parents):
        candidate = directory / PYPROJECT
        if not candidate.is_file():
            continue
        try:
            return candidate, _read_pyproject(candidate)
        except DiscoveryError as exc:
            logger.warning("Skipping invalid %s: %s", candidate, exc)
    raise DiscoveryError(
        f"No pyproject.toml found in {start} or any parent directory.",
        hint="Run inside a project, or pass --pyproject PATH.",
    )


def _find_enclosing_workspace(project_dir: Path) -> tuple[Path, dict[str, Any]] | None:
    for directory in project_dir.parents:
        candidate = directory / PYPROJECT
        if not candidate.is_file():
            continue
        try:
            data = _read_pyproject(candidate)
        except DiscoveryError as exc:
            logger.warning("Skipping invalid %s: %s", candidate, exc)
            continue
        workspace = _workspace_table(data)
        if workspace is not None and _is_member(directory, workspace, project_dir):
            return candidate, data
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class PyProjectLoader:
    """Concrete :class:`~wsfmt.core.protocols.DescriptorLoader`."""

    def load(self, path: Path) -> ProjectDescriptor:
        """Load exactly *path*, without workspace promotion."""
        resolved = path.expanduser().resolve()
        return _build_descriptor(resolved, _read_pyproject(resolved))

    def discover(self, cwd: Path | None = None) -> ProjectDescriptor:
        """Find the nearest descriptor above *cwd*, promoted to its workspace."""
        start = (cwd or Path.cwd()).resolve()
        path, data = _find_nearest(start)

        if _workspace_table(data) is None:
            enclosing = _find_enclosing_workspace(path.parent)
            if enclosing is not None:
                logger.debug("%s is a member of workspace %s", path, enclosing[0])
                path, data = enclosing

        return _build_descriptor(path, data)

    def load_or_discover(
        self,
        path: Path | None,
        cwd: Path | None = None,
    ) -> ProjectDescriptor:
        """Load *path* when given, otherwise discover from *cwd*."""
        if path is not None:
            return self.load(path)
        return self.discover(cwd)


def load_or_discover(path: Path | None = None, cwd: Path | None = None) -> ProjectDescriptor:
    """Module-level convenience around :class:`PyProjectLoader`."""
    return PyProjectLoader().load_or_discover(path, cwd)
