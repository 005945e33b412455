# stages/cleanup.py
# -*- coding: utf-8 -*-
"""
Removal of a previous installation.
"""

from common.command_utils import log_setup
from common.file_utils import cleanup_directory
from stages.base_stage import BaseStage, SetupAbortedError
from stages.registry import StageRegistry
from tak_setup.cli_handler import cli_confirm


@StageRegistry.register(
    name="cleanup",
    metadata={
        "dependencies": ["prerequisites"],
        "description": "Remove a previous installation",
    },
)
class CleanupStage(BaseStage):
    """
    If the install directory exists the operator must confirm its removal.
    Declining aborts the run with nothing removed.
    """

    def run(self) -> bool:
        install_dir = self.context.install_dir
        if not install_dir.exists():
            log_setup(
                f"No previous installation at {install_dir}.",
                "debug",
                self.logger,
                self.app_settings,
            )
            return True

        log_setup(
            f"{self.symbols.get('warning', '⚠️')} Directory '{install_dir.name}' already exists.",
            "warning",
            self.logger,
            self.app_settings,
        )
        if not cli_confirm(
            "Do you want to remove it?", self.app_settings, self.logger
        ):
            raise SetupAbortedError(
                f"Existing installation at '{install_dir}' kept. Exiting setup."
            )

        cleanup_directory(install_dir, self.app_settings, self.logger)
        cleanup_directory(
            self.context.scratch_dir, self.app_settings, self.logger
        )

        volume = self.app_settings.release.db_volume
        if not self.tools.remove_volume(volume):
            log_setup(
                f"{self.symbols.get('warning', '⚠️')} Could not remove docker volume '{volume}'. Continuing.",
                "warning",
                self.logger,
                self.app_settings,
            )

        log_setup(
            "Removed previous setup.",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
