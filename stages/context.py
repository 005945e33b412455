# stages/context.py
"""
Per-run state handed from one stage to the next.
"""

import time
from pathlib import Path
from typing import Callable, Dict, Optional

from tak_setup.config_models import AppSettings
from tak_setup.external_tools import ExternalTools


class RunContext:
    """
    Values discovered during a single installer run.

    Nothing here is persisted; the only durable outputs of a run are the
    environment file and the extracted install tree.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        work_dir: Path,
        tools: ExternalTools,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.app_settings = app_settings
        self.work_dir = Path(work_dir)
        self.tools = tools
        self.sleep = sleep

        self.subject: Dict[str, str] = {}
        self.server_ip: Optional[str] = None
        self.compose_file: Optional[Path] = None

    @property
    def install_dir(self) -> Path:
        return self.work_dir / self.app_settings.release.install_dir

    @property
    def scratch_dir(self) -> Path:
        return Path(self.app_settings.release.scratch_dir)

    @property
    def env_file(self) -> Path:
        return self.work_dir / self.app_settings.compose.env_file

    def require_compose_file(self) -> Path:
        """The compose file chosen at launch; stages after launch need it."""
        if self.compose_file is None:
            raise RuntimeError(
                "No compose file selected; the orchestration stack has not been launched."
            )
        return self.compose_file

    def require_server_ip(self) -> str:
        if not self.server_ip:
            raise RuntimeError("Server IP address has not been resolved.")
        return self.server_ip
