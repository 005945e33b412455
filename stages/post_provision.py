# stages/post_provision.py
# -*- coding: utf-8 -*-
"""
One-shot steps after certificate generation: point the server at its new
keystore, restart the stack and register the client certificate. No step
is retried; the first failure ends the run.
"""

import shlex

from common.command_utils import log_setup
from common.file_utils import replace_in_file
from stages.base_stage import BaseStage
from stages.registry import StageRegistry


@StageRegistry.register(
    name="post_provision",
    metadata={
        "dependencies": ["certificates"],
        "description": "Configure the keystore and register the client certificate",
    },
)
class PostProvisionStage(BaseStage):
    def run(self) -> bool:
        settings = self.app_settings.post_provision
        if not settings.enabled:
            log_setup(
                "Post-provisioning disabled; skipping keystore patch and certificate registration.",
                "info",
                self.logger,
                self.app_settings,
            )
            return True

        return (
            self.patch_keystore_reference()
            and self.restart_stack()
            and self.register_client_certificate()
        )

    def patch_keystore_reference(self) -> bool:
        settings = self.app_settings.post_provision
        core_config = self.context.install_dir / settings.core_config
        keystore = f"{self.context.require_server_ip()}.jks"
        try:
            count = replace_in_file(
                core_config,
                settings.keystore_placeholder,
                keystore,
                self.app_settings,
                self.logger,
            )
        except OSError as e:
            log_setup(
                f"{self.symbols.get('error', '❌')} Could not update {core_config}: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        if count == 0:
            log_setup(
                f"{self.symbols.get('warning', '⚠️')} '{settings.keystore_placeholder}' not found in {core_config.name}; leaving it unchanged.",
                "warning",
                self.logger,
                self.app_settings,
            )
        else:
            log_setup(
                f"{core_config.name} now uses keystore {keystore}.",
                "success",
                self.logger,
                self.app_settings,
            )
        return True

    def restart_stack(self) -> bool:
        log_setup(
            "Restarting Docker containers...",
            "info",
            self.logger,
            self.app_settings,
        )
        if not self.tools.compose_restart(
            str(self.context.require_compose_file()),
            str(self.context.env_file),
        ):
            log_setup(
                f"{self.symbols.get('error', '❌')} Failed to restart the Docker containers.",
                "error",
                self.logger,
                self.app_settings,
            )
            return False
        return True

    def register_client_certificate(self) -> bool:
        settings = self.app_settings.post_provision
        cert_settings = self.app_settings.certificates
        identity = cert_settings.client_identity
        pem_path = f"{cert_settings.container_certs_dir.rstrip('/')}/files/{identity}.pem"

        self.context.sleep(settings.settle_seconds)
        log_setup(
            f"Registering client certificate for '{identity}'...",
            "info",
            self.logger,
            self.app_settings,
        )
        script = (
            f"java -jar {shlex.quote(settings.user_manager_jar)} certmod -A {shlex.quote(pem_path)}"
        )
        if not self.tools.compose_exec(
            str(self.context.require_compose_file()),
            str(self.context.env_file),
            self.app_settings.compose.service,
            script,
        ):
            log_setup(
                f"{self.symbols.get('error', '❌')} Failed to register the client certificate for '{identity}'.",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        p12_path = self.context.install_dir / "certs" / "files" / f"{identity}.p12"
        log_setup(
            f"Client certificate registered. Import {p12_path} into your browser to reach the admin UI.",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
