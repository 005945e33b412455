# stages/environment.py
# -*- coding: utf-8 -*-
"""
Resolve the certificate subject and server address, then write the
environment file read by docker compose and the certificate scripts.
"""

from typing import Dict, List, Tuple

from common.command_utils import log_setup
from common.file_utils import write_env_file
from common.system_utils import get_primary_ip_address
from stages.base_stage import BaseStage
from stages.registry import StageRegistry
from tak_setup.cli_handler import cli_prompt_with_default

# (settings field, env key, prompt label)
SUBJECT_FIELDS: List[Tuple[str, str, str]] = [
    ("country", "COUNTRY", "Country (for cert generation)"),
    ("state", "STATE", "State (for cert generation)"),
    ("city", "CITY", "City (for cert generation)"),
    (
        "organizational_unit",
        "ORGANIZATIONAL_UNIT",
        "Organizational Unit (for cert generation)",
    ),
]


@StageRegistry.register(
    name="environment",
    metadata={
        "dependencies": ["release"],
        "description": "Write the compose environment file",
    },
)
class EnvironmentStage(BaseStage):
    """
    Each subject field resolves to the configured value, else the operator's
    answer, else the default. The file is rewritten from scratch every run.
    """

    def run(self) -> bool:
        subject = self.resolve_subject()

        server_ip = self.app_settings.server_ip or get_primary_ip_address(
            self.app_settings, self.logger
        )
        if not server_ip:
            log_setup(
                f"{self.symbols.get('error', '❌')} Could not determine the server IP address. Set it with --server-ip.",
                "error",
                self.logger,
                self.app_settings,
            )
            return False
        log_setup(
            f"Using IP address: {server_ip}",
            "info",
            self.logger,
            self.app_settings,
        )

        self.context.subject = subject
        self.context.server_ip = server_ip

        values: Dict[str, str] = {
            env_key: subject[field] for field, env_key, _ in SUBJECT_FIELDS
        }
        values["SERVER_IP"] = server_ip
        write_env_file(
            self.context.env_file, values, self.app_settings, self.logger
        )
        log_setup(
            f"Wrote {self.context.env_file.name}.",
            "success",
            self.logger,
            self.app_settings,
        )
        return True

    def resolve_subject(self) -> Dict[str, str]:
        defaults = self.app_settings.subject_defaults
        unresolved = [
            field
            for field, _, _ in SUBJECT_FIELDS
            if not getattr(self.app_settings, field)
        ]
        if unresolved and self.app_settings.interactive:
            log_setup(
                f"SSL setup. Hit enter (x{len(unresolved)}) to accept the defaults:",
                "info",
                self.logger,
                self.app_settings,
            )

        subject: Dict[str, str] = {}
        for field, _, label in SUBJECT_FIELDS:
            provided = getattr(self.app_settings, field)
            default = getattr(defaults, field)
            if provided:
                subject[field] = provided
            else:
                subject[field] = cli_prompt_with_default(
                    label, default, self.app_settings, self.logger
                )
        return subject
