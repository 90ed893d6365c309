"""Runtime configuration read from environment variables.

Only two knobs exist; both have working defaults so wsfmt runs with no
configuration at all.

==========================  ==================  ==========================
Variable                    Default             Meaning
==========================  ==================  ==========================
``WSFMT_HOME``              ``~/.wsfmt``        State directory
``WSFMT_RUFF_REQUIREMENT``  ``ruff==0.6.9``     pip requirement for ruff
==========================  ==================  ==========================
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

HOME_ENV: str = "WSFMT_HOME"
RUFF_REQUIREMENT_ENV: str = "WSFMT_RUFF_REQUIREMENT"

DEFAULT_RUFF_REQUIREMENT: str = "ruff==0.6.9"

SELF_ENV_DIRNAME: str = "self"


def _default_home() -> Path:
    return Path.home() / ".wsfmt"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved wsfmt settings."""

    home: Path
    ruff_requirement: str = DEFAULT_RUFF_REQUIREMENT

    @property
    def tool_env_dir(self) -> Path:
        """Directory of the isolated environment that hosts ruff."""
        return self.home / SELF_ENV_DIRNAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``).

        Empty values are treated as unset.
        """
        env = os.environ if environ is None else environ

        raw_home = env.get(HOME_ENV, "").strip()
        home = Path(raw_home).expanduser() if raw_home else _default_home()

        requirement = env.get(RUFF_REQUIREMENT_ENV, "").strip() or DEFAULT_RUFF_REQUIREMENT
        return cls(home=home, ruff_requirement=requirement)
