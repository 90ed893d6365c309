"""Infrastructure: the isolated virtualenv that hosts ruff.

Rules
-----
* The environment lives under :attr:`Settings.tool_env_dir` and is
  never put on ``PATH``.
* Provisioning happens at most once per configured requirement; a
  readiness marker records what was installed.
* Every ``OSError`` / ``CalledProcessError`` is re-raised as
  :class:`~wsfmt.exceptions.ProvisioningError`.
* No ``print()`` — progress is reported through :mod:`logging`.
"""

from __future__ import annotations

import logging
import subprocess
import venv
from pathlib import Path

from wsfmt.core.invocation import VENV_BIN, tool_executable
from wsfmt.core.models import OutputMode
from wsfmt.exceptions import ProvisioningError
from wsfmt.infra.settings import Settings

logger = logging.getLogger(__name__)

READY_MARKER: str = ".wsfmt-ready"


def _venv_python(env_dir: Path) -> Path:
    name = "python.exe" if VENV_BIN == "Scripts" else "python"
    return env_dir / VENV_BIN / name


class ToolEnvironment:
    """Concrete :class:`~wsfmt.core.protocols.EnvironmentProvisioner`.

    Parameters
    ----------
    settings:
        Resolved settings; defaults to :meth:`Settings.from_env`.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings: Settings = settings if settings is not None else Settings.from_env()

    @property
    def env_dir(self) -> Path:
        return self._settings.tool_env_dir

    @property
    def marker_path(self) -> Path:
        return self.env_dir / READY_MARKER

    def is_ready(self) -> bool:
        """Return ``True`` when ruff is installed for the configured requirement."""
        if not tool_executable(self.env_dir).is_file():
            return False
        try:
            recorded = self.marker_path.read_text(encoding="utf-8").strip()
        except OSError:
            return False
        return recorded == self._settings.ruff_requirement

    def ensure(self, output_mode: OutputMode) -> Path:
        """Return the environment root, bootstrapping it first if needed.

        Raises
        ------
        ProvisioningError
            When the virtualenv cannot be created or ruff cannot be
            installed into it.
        """
        if self.is_ready():
            return self.env_dir

        logger.info("Bootstrapping tool environment in %s", self.env_dir)
        self._create_venv()
        self._install(output_mode)
        self._write_marker()
        logger.info("Installed %s", self._settings.ruff_requirement)
        return self.env_dir

    # ------------------------------------------------------------------
    # Provisioning steps
    # ------------------------------------------------------------------

    def _create_venv(self) -> None:
        try:
            self.env_dir.parent.mkdir(parents=True, exist_ok=True)
            builder = venv.EnvBuilder(with_pip=True, clear=True)
            builder.create(self.env_dir)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise ProvisioningError(
                f"Failed to create tool environment at {self.env_dir}: {exc}",
                hint="Check that the Python 'venv' module and ensurepip are available.",
            ) from exc

    def _install(self, output_mode: OutputMode) -> None:
        cmd = [str(_venv_python(self.env_dir)), "-m", "pip", "install"]
        if output_mode is OutputMode.QUIET:
            cmd.append("-q")
        cmd.append(self._settings.ruff_requirement)
        logger.debug("Running: %s", " ".join(cmd))

        capture = output_mode is not OutputMode.VERBOSE
        try:
            subprocess.run(cmd, check=True, capture_output=capture, text=True)
        except subprocess.CalledProcessError as exc:
            details = (exc.stderr or "").strip().splitlines()
            raise ProvisioningError(
                f"Failed to install {self._settings.ruff_requirement} "
                f"(pip exited with code {exc.returncode}).",
                hint=details[-1] if details else "Re-run with --verbose to see pip output.",
            ) from exc
        except OSError as exc:
            raise ProvisioningError(
                f"Could not run pip in {self.env_dir}: {exc}",
            ) from exc

    def _write_marker(self) -> None:
        try:
            self.marker_path.write_text(self._settings.ruff_requirement + "\n", encoding="utf-8")
        except OSError as exc:
            raise ProvisioningError(
                f"Could not record tool environment state in {self.marker_path}: {exc}",
            ) from exc
