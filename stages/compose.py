# stages/compose.py
# -*- coding: utf-8 -*-
"""
Start the TAK server stack with docker compose.
"""

from pathlib import Path

from common.command_utils import log_setup
from common.system_utils import get_host_architecture
from stages.base_stage import BaseStage
from stages.registry import StageRegistry


@StageRegistry.register(
    name="compose",
    metadata={
        "dependencies": ["environment"],
        "description": "Start the docker compose stack",
    },
)
class ComposeStage(BaseStage):
    """
    ``arm64`` hosts get the ARM compose file; every other architecture gets
    the default one. The chosen file is kept on the run context so later
    compose calls target the same project.
    """

    def select_compose_file(self) -> Path:
        compose = self.app_settings.compose
        arch = get_host_architecture(self.app_settings, self.logger)
        if arch == "arm64":
            log_setup(
                "Using ARM64-specific Docker compose file.",
                "info",
                self.logger,
                self.app_settings,
            )
            return self.context.work_dir / compose.arm_file
        return self.context.work_dir / compose.file

    def run(self) -> bool:
        compose_file = self.select_compose_file()
        if not compose_file.is_file():
            log_setup(
                f"{self.symbols.get('error', '❌')} Compose file {compose_file} not found.",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        log_setup(
            "Starting Docker containers...",
            "info",
            self.logger,
            self.app_settings,
        )
        if not self.tools.compose_up(
            str(compose_file), str(self.context.env_file)
        ):
            log_setup(
                f"{self.symbols.get('error', '❌')} Docker setup failed.",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        self.context.compose_file = compose_file
        log_setup(
            "Docker containers are running.",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
