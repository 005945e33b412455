# tak_setup/external_tools.py
# -*- coding: utf-8 -*-
"""
Typed wrappers around every external program the installer drives.

Stages never build command lines themselves; they call these methods, which
return True/False (or a value) and log failures. Tests replace an
``ExternalTools`` instance with a mock to exercise stage logic without docker.
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional

from common.command_utils import get_symbols, log_setup, run_command
from tak_setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


class ExternalTools:
    """Boundary to ``unzip``, ``docker`` and ``docker compose``."""

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = logger or module_logger

    def _run(
        self,
        command: List[str],
        capture_output: bool = True,
        cwd: Optional[str] = None,
    ) -> bool:
        symbols = get_symbols(self.app_settings)
        try:
            run_command(
                command,
                self.app_settings,
                check=True,
                capture_output=capture_output,
                current_logger=self.logger,
                cwd=cwd,
            )
            return True
        except subprocess.CalledProcessError:
            return False
        except FileNotFoundError:
            return False
        except OSError as e:
            log_setup(
                f"{symbols.get('error', '❌')} Could not run {command[0]}: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

    # --- archives ---

    def extract_archive(self, archive: Path, destination: Path) -> bool:
        """``unzip -q <archive> -d <destination>``; keeps file modes."""
        return self._run(
            ["unzip", "-q", str(archive), "-d", str(destination)]
        )

    # --- docker ---

    def remove_volume(self, volume: str) -> bool:
        return self._run(["docker", "volume", "rm", "--force", volume])

    # --- docker compose ---

    def _compose_base(self, compose_file: str, env_file: str) -> List[str]:
        return list(self.app_settings.compose.command) + [
            "--file",
            compose_file,
            "--env-file",
            env_file,
        ]

    def compose_up(self, compose_file: str, env_file: str) -> bool:
        return self._run(
            self._compose_base(compose_file, env_file)
            + ["up", "--force-recreate", "-d"],
            capture_output=False,
        )

    def compose_stop(
        self, compose_file: str, env_file: str, service: str
    ) -> bool:
        return self._run(
            self._compose_base(compose_file, env_file) + ["stop", service]
        )

    def compose_restart(self, compose_file: str, env_file: str) -> bool:
        return self._run(
            self._compose_base(compose_file, env_file) + ["restart"],
            capture_output=False,
        )

    def compose_exec(
        self,
        compose_file: str,
        env_file: str,
        service: str,
        script: str,
        workdir: Optional[str] = None,
    ) -> bool:
        """
        Run ``script`` with ``bash -c`` inside ``service``. ``-T`` disables
        TTY allocation so the call also works when stdin is not a terminal.
        """
        if workdir:
            script = f"cd {shlex.quote(workdir)} && {script}"
        return self._run(
            self._compose_base(compose_file, env_file)
            + ["exec", "-T", service, "bash", "-c", script]
        )
