"""wsfmt — project-aware ruff dispatcher for Python workspaces.

Resolves which workspace projects to target, bootstraps an isolated
ruff environment and forwards ruff's verdict as the process exit code.
"""

from wsfmt.version import __version__

__all__: list[str] = ["__version__"]
