"""Tests for project selection (core/selection.py).

Pure tests — descriptors are built in memory, nothing touches disk.

Coverage:
* Explicit names keep the caller's order and beat ``--all``.
* ``--all`` returns every project in declared order.
* Default selection: deepest containing project, sole project, ambiguity.
* Unknown names and empty descriptors.
"""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from wsfmt.core.models import ProjectDescriptor, SubProject
from wsfmt.core.selection import select_projects
from wsfmt.exceptions import AmbiguousSelectionError, DiscoveryError, UnknownPackageError


ROOT = Path("/ws")


def _workspace(*names: str, root_project: str | None = None) -> ProjectDescriptor:
    projects: list[SubProject] = []
    if root_project is not None:
        projects.append(SubProject(root_project, ROOT))
    projects.extend(SubProject(name, ROOT / "packages" / name) for name in names)
    return ProjectDescriptor(
        path=ROOT / "pyproject.toml",
        root=ROOT,
        projects=tuple(projects),
        is_workspace=True,
    )


def _names(projects: tuple[SubProject, ...]) -> list[str]:
    return [p.name for p in projects]


# ---------------------------------------------------------------------------
# Explicit names
# ---------------------------------------------------------------------------

class TestExplicitNames:
    def test_single_name(self) -> None:
        selected = select_projects(_workspace("core", "cli"), False, ["cli"])
        assert selected == (SubProject("cli", ROOT / "packages" / "cli"),)

    def test_preserves_requested_order(self) -> None:
        descriptor = _workspace("a", "b", "c", "d")
        assert _names(select_projects(descriptor, False, ["d", "a", "c"])) == ["d", "a", "c"]

    def test_order_law_over_shuffles(self) -> None:
        names = ["a", "b", "c", "d", "e"]
        descriptor = _workspace(*names)
        rng = random.Random(1234)
        for _ in range(20):
            requested = rng.sample(names, k=rng.randint(1, len(names)))
            assert _names(select_projects(descriptor, False, requested)) == requested

    def test_names_take_precedence_over_all(self) -> None:
        selected = select_projects(_workspace("core", "cli"), True, ["core"])
        assert _names(selected) == ["core"]

    def test_duplicates_collapse(self) -> None:
        selected = select_projects(_workspace("core", "cli"), False, ["cli", "core", "cli"])
        assert _names(selected) == ["cli", "core"]

    def test_root_project_addressable_by_name(self) -> None:
        descriptor = _workspace("core", root_project="monorepo")
        assert select_projects(descriptor, False, ["monorepo"])[0].root == ROOT

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(UnknownPackageError) as exc_info:
            select_projects(_workspace("core", "cli"), False, ["missing"])
        assert exc_info.value.names == ("missing",)
        assert exc_info.value.hint is not None
        assert "core" in exc_info.value.hint

    def test_all_unknown_names_reported(self) -> None:
        with pytest.raises(UnknownPackageError) as exc_info:
            select_projects(_workspace("core"), False, ["x", "core", "y"])
        assert exc_info.value.names == ("x", "y")

    def test_match_is_exact(self) -> None:
        with pytest.raises(UnknownPackageError):
            select_projects(_workspace("core"), False, ["Core"])


# ---------------------------------------------------------------------------
# --all
# ---------------------------------------------------------------------------

class TestSelectAll:
    def test_declared_order(self) -> None:
        descriptor = _workspace("zeta", "alpha", "mid")
        assert _names(select_projects(descriptor, True, [])) == ["zeta", "alpha", "mid"]

    def test_includes_root_project_first(self) -> None:
        descriptor = _workspace("core", "cli", root_project="monorepo")
        assert _names(select_projects(descriptor, True, [])) == ["monorepo", "core", "cli"]

    def test_length_and_uniqueness(self) -> None:
        descriptor = _workspace("a", "b", "c")
        selected = select_projects(descriptor, True, [])
        assert len(selected) == len(descriptor.projects)
        assert len(set(selected)) == len(selected)

    def test_empty_descriptor_returns_empty(self) -> None:
        assert select_projects(_workspace(), True, []) == ()


# ---------------------------------------------------------------------------
# Default selection
# ---------------------------------------------------------------------------

class TestDefaultSelection:
    def test_single_project_without_cwd(self) -> None:
        descriptor = ProjectDescriptor(
            path=ROOT / "pyproject.toml",
            root=ROOT,
            projects=(SubProject("solo", ROOT),),
        )
        assert select_projects(descriptor, False, []) == (SubProject("solo", ROOT),)

    def test_cwd_inside_member(self) -> None:
        descriptor = _workspace("core", "cli")
        cwd = ROOT / "packages" / "cli" / "src" / "cli"
        assert _names(select_projects(descriptor, False, [], cwd=cwd)) == ["cli"]

    def test_nearest_project_wins_over_root(self) -> None:
        descriptor = _workspace("core", "cli", root_project="monorepo")
        cwd = ROOT / "packages" / "core"
        assert _names(select_projects(descriptor, False, [], cwd=cwd)) == ["core"]

    def test_root_project_when_cwd_at_root(self) -> None:
        descriptor = _workspace("core", "cli", root_project="monorepo")
        assert _names(select_projects(descriptor, False, [], cwd=ROOT)) == ["monorepo"]

    def test_virtual_workspace_root_is_ambiguous(self) -> None:
        with pytest.raises(AmbiguousSelectionError) as exc_info:
            select_projects(_workspace("core", "cli"), False, [], cwd=ROOT)
        assert exc_info.value.candidates == ("core", "cli")

    def test_cwd_outside_single_member_workspace(self) -> None:
        descriptor = _workspace("only")
        assert _names(select_projects(descriptor, False, [], cwd=Path("/elsewhere"))) == ["only"]

    def test_sibling_prefix_is_not_containment(self) -> None:
        descriptor = _workspace("core", "core-extras")
        cwd = ROOT / "packages" / "core-extras"
        assert _names(select_projects(descriptor, False, [], cwd=cwd)) == ["core-extras"]

    def test_empty_descriptor_without_filters(self) -> None:
        with pytest.raises(DiscoveryError, match="No projects"):
            select_projects(_workspace(), False, [])
