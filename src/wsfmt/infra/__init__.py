"""Infrastructure layer — filesystem, virtualenv and subprocess integration.

Every raw ``OSError``, ``tomllib`` or ``subprocess`` exception must be
caught here and re-raised as a :class:`~wsfmt.exceptions.WsfmtError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from wsfmt.infra.process_runner import SubprocessRunner, run_invocation
from wsfmt.infra.pyproject_loader import PyProjectLoader, load_or_discover
from wsfmt.infra.settings import Settings
from wsfmt.infra.tool_env import ToolEnvironment

__all__: list[str] = [
    "PyProjectLoader",
    "Settings",
    "SubprocessRunner",
    "ToolEnvironment",
    "load_or_discover",
    "run_invocation",
]
