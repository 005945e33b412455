# stages/prerequisites.py
# -*- coding: utf-8 -*-
"""
Host prerequisite checks.

Fails before anything on the host is changed when a required command is
missing or a required port already has a listener.
"""

from common.command_utils import command_exists, log_setup
from common.network_utils import find_ports_in_use
from stages.base_stage import BaseStage
from stages.registry import StageRegistry


@StageRegistry.register(
    name="prerequisites",
    metadata={
        "dependencies": [],
        "description": "Verify required commands and free ports",
    },
)
class PrerequisitesStage(BaseStage):
    """Checks commands on PATH and listening TCP ports. Changes nothing."""

    def run(self) -> bool:
        return self._verify_dependencies() and self._check_ports()

    def _verify_dependencies(self) -> bool:
        missing = [
            cmd
            for cmd in self.app_settings.prereqs.commands
            if not command_exists(cmd)
        ]
        for cmd in missing:
            log_setup(
                f"{self.symbols.get('error', '❌')} Missing required command: {cmd}. Please install it.",
                "error",
                self.logger,
                self.app_settings,
            )
        return not missing

    def _check_ports(self) -> bool:
        ports = self.app_settings.prereqs.ports
        log_setup(
            "Checking required ports...",
            "info",
            self.logger,
            self.app_settings,
        )
        in_use = set(
            find_ports_in_use(ports, self.app_settings, self.logger)
        )

        for port in ports:
            if port in in_use:
                log_setup(
                    f"{self.symbols.get('error', '❌')} Port {port} is in use. Resolve the issue before proceeding.",
                    "error",
                    self.logger,
                    self.app_settings,
                )
            else:
                log_setup(
                    f"Port {port} is available.",
                    "success",
                    self.logger,
                    self.app_settings,
                )
        return not in_use
