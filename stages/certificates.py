# stages/certificates.py
# -*- coding: utf-8 -*-
"""
Certificate provisioning inside the running TAK container.

The vendor scripts are flaky while the database container is still starting,
so the whole sequence is retried as a unit: any failing step ends the
attempt and the next attempt starts again from the first step.
"""

import shlex
from typing import Callable, List, Tuple

from common.command_utils import log_setup
from common.retry_utils import RetryPolicy
from common.system_utils import get_invoking_user_ids
from stages.base_stage import BaseStage
from stages.registry import StageRegistry
from tak_setup.cli_handler import cli_confirm


@StageRegistry.register(
    name="certificates",
    metadata={
        "dependencies": ["compose"],
        "description": "Generate CA, server and client certificates",
    },
)
class CertificatesStage(BaseStage):
    """
    Generates the root CA (unless an existing one is reused), the server
    certificate for the resolved IP and the client certificate, hands the
    certificate directory to the invoking user and stops the service.
    """

    def run(self) -> bool:
        cert_settings = self.app_settings.certificates
        regenerate_ca = self.decide_ca_regeneration()

        log_setup(
            "Generating certificates...",
            "info",
            self.logger,
            self.app_settings,
        )
        policy = RetryPolicy(
            max_attempts=cert_settings.max_attempts,
            delay_seconds=cert_settings.retry_delay_seconds,
            sleep=self.context.sleep,
        )
        succeeded = policy.run(
            lambda attempt: self.provision_once(regenerate_ca),
            description="certificate generation",
            app_settings=self.app_settings,
            current_logger=self.logger,
        )
        if not succeeded:
            log_setup(
                f"{self.symbols.get('error', '❌')} Certificate generation failed after {cert_settings.max_attempts} attempts.",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        log_setup(
            "Certificates generated.",
            "success",
            self.logger,
            self.app_settings,
        )
        return True

    def decide_ca_regeneration(self) -> bool:
        """
        Made once, before the first attempt. An existing CA is either kept
        for every attempt or deleted here and regenerated in each attempt.
        """
        ca_path = self.context.install_dir / self.app_settings.certificates.ca_file
        if not ca_path.exists():
            return True

        log_setup(
            f"{self.symbols.get('warning', '⚠️')} A certificate authority already exists at {ca_path}.",
            "warning",
            self.logger,
            self.app_settings,
        )
        if cli_confirm(
            "Reuse the existing certificate authority?",
            self.app_settings,
            self.logger,
            non_interactive_default=True,
        ):
            log_setup(
                "Reusing existing certificate authority.",
                "info",
                self.logger,
                self.app_settings,
            )
            return False

        ca_path.unlink()
        log_setup(
            "Removed existing certificate authority; a new one will be generated.",
            "info",
            self.logger,
            self.app_settings,
        )
        return True

    def build_steps(self, regenerate_ca: bool) -> List[Tuple[str, Callable[[], bool]]]:
        cert_settings = self.app_settings.certificates
        certs_dir = cert_settings.container_certs_dir
        server_ip = self.context.require_server_ip()
        uid, gid = get_invoking_user_ids()

        steps: List[Tuple[str, Callable[[], bool]]] = []
        if regenerate_ca:
            steps.append(
                (
                    "root CA",
                    lambda: self._exec_in_certs_dir(
                        f"./makeRootCa.sh --ca-name {shlex.quote(cert_settings.ca_name)}"
                    ),
                )
            )
        steps.extend(
            [
                (
                    "server certificate",
                    lambda: self._exec_in_certs_dir(
                        f"./makeCert.sh server {shlex.quote(server_ip)}"
                    ),
                ),
                (
                    "client certificate",
                    lambda: self._exec_in_certs_dir(
                        f"./makeCert.sh client {shlex.quote(cert_settings.client_identity)}"
                    ),
                ),
                (
                    "certificate ownership",
                    lambda: self._exec_in_certs_dir(
                        f"chown -R {uid}:{gid} {shlex.quote(certs_dir.rstrip('/') + '/')}"
                    ),
                ),
                ("service stop", self._stop_service),
            ]
        )
        return steps

    def provision_once(self, regenerate_ca: bool) -> bool:
        """One attempt. Stops at the first failing step."""
        for name, step in self.build_steps(regenerate_ca):
            log_setup(
                f"Running step: {name}",
                "debug",
                self.logger,
                self.app_settings,
            )
            if not step():
                log_setup(
                    f"{self.symbols.get('warning', '⚠️')} Step '{name}' failed.",
                    "warning",
                    self.logger,
                    self.app_settings,
                )
                return False
        return True

    def _exec_in_certs_dir(self, script: str) -> bool:
        return self.tools.compose_exec(
            str(self.context.require_compose_file()),
            str(self.context.env_file),
            self.app_settings.compose.service,
            script,
            workdir=self.app_settings.certificates.container_certs_dir,
        )

    def _stop_service(self) -> bool:
        return self.tools.compose_stop(
            str(self.context.require_compose_file()),
            str(self.context.env_file),
            self.app_settings.compose.service,
        )
