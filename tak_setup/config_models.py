# tak_setup/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the TAK server setup,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tak_setup.config import (
    CA_FILE_RELATIVE_DEFAULT,
    CA_NAME_DEFAULT,
    CERT_MAX_ATTEMPTS_DEFAULT,
    CERT_RETRY_DELAY_SECONDS_DEFAULT,
    CITY_DEFAULT,
    CLIENT_IDENTITY_DEFAULT,
    COMPOSE_FILE_ARM_DEFAULT,
    COMPOSE_FILE_DEFAULT,
    CONTAINER_CERTS_DIR_DEFAULT,
    CORE_CONFIG_RELATIVE_DEFAULT,
    COUNTRY_DEFAULT,
    DB_VOLUME_DEFAULT,
    ENV_FILE_DEFAULT,
    INSTALL_DIR_DEFAULT,
    KEYSTORE_PLACEHOLDER_DEFAULT,
    LOG_PREFIX_DEFAULT,
    ORGANIZATIONAL_UNIT_DEFAULT,
    RELEASE_GLOB_DEFAULT,
    RELEASE_SUBDIR_DEFAULT,
    REQUIRED_COMMANDS_DEFAULT,
    REQUIRED_PORTS_DEFAULT,
    SCRATCH_DIR_DEFAULT,
    SERVICE_NAME_DEFAULT,
    SETTLE_SECONDS_DEFAULT,
    STATE_DEFAULT,
    SYMBOLS_DEFAULT,
    USER_MANAGER_JAR_DEFAULT,
    WEB_UI_PORT_DEFAULT,
)

__all__ = [
    "SYMBOLS_DEFAULT",
    "PrereqSettings",
    "ReleaseSettings",
    "ComposeSettings",
    "SubjectDefaults",
    "CertificateSettings",
    "PostProvisionSettings",
    "AppSettings",
]


class PrereqSettings(BaseModel):
    """Host checks performed before anything is touched."""

    commands: List[str] = Field(
        default_factory=lambda: list(REQUIRED_COMMANDS_DEFAULT),
        description="Commands that must be found on PATH.",
    )
    ports: List[int] = Field(
        default_factory=lambda: list(REQUIRED_PORTS_DEFAULT),
        description="TCP ports that must not have a listening socket.",
    )


class ReleaseSettings(BaseModel):
    """Where the vendor release archive is found and where it is unpacked."""

    archive_glob: str = Field(
        default=RELEASE_GLOB_DEFAULT,
        description="Glob matched in the working directory to find the release archive.",
    )
    scratch_dir: str = Field(
        default=SCRATCH_DIR_DEFAULT,
        description="Temporary directory the archive is extracted into.",
    )
    subdirectory: str = Field(
        default=RELEASE_SUBDIR_DEFAULT,
        description="Name of the directory inside the archive that becomes the install tree.",
    )
    install_dir: str = Field(
        default=INSTALL_DIR_DEFAULT,
        description="Install directory, relative to the working directory.",
    )
    db_volume: str = Field(
        default=DB_VOLUME_DEFAULT,
        description="Named docker volume removed during cleanup.",
    )


class ComposeSettings(BaseModel):
    """docker compose invocation settings."""

    command: List[str] = Field(
        default_factory=lambda: ["docker", "compose"],
        description="Base command for the orchestration tool.",
    )
    file: str = Field(default=COMPOSE_FILE_DEFAULT, description="Compose file used on non-ARM hosts.")
    arm_file: str = Field(default=COMPOSE_FILE_ARM_DEFAULT, description="Compose file used on arm64 hosts.")
    env_file: str = Field(default=ENV_FILE_DEFAULT, description="Environment file written for compose.")
    service: str = Field(default=SERVICE_NAME_DEFAULT, description="Name of the TAK server service.")


class SubjectDefaults(BaseModel):
    """Fallback values for the certificate subject when nothing is entered."""

    country: str = COUNTRY_DEFAULT
    state: str = STATE_DEFAULT
    city: str = CITY_DEFAULT
    organizational_unit: str = ORGANIZATIONAL_UNIT_DEFAULT


class CertificateSettings(BaseModel):
    """Certificate provisioning performed inside the running container."""

    ca_name: str = Field(default=CA_NAME_DEFAULT, description="Name passed to makeRootCa.sh.")
    client_identity: str = Field(default=CLIENT_IDENTITY_DEFAULT, description="Client certificate identity.")
    container_certs_dir: str = Field(
        default=CONTAINER_CERTS_DIR_DEFAULT,
        description="Certificate directory inside the TAK container.",
    )
    ca_file: str = Field(
        default=CA_FILE_RELATIVE_DEFAULT,
        description="CA certificate path, relative to the install directory.",
    )
    max_attempts: int = Field(default=CERT_MAX_ATTEMPTS_DEFAULT, ge=1)
    retry_delay_seconds: float = Field(default=CERT_RETRY_DELAY_SECONDS_DEFAULT, ge=0)


class PostProvisionSettings(BaseModel):
    """Steps run once after certificates exist."""

    enabled: bool = True
    core_config: str = Field(
        default=CORE_CONFIG_RELATIVE_DEFAULT,
        description="Server configuration file, relative to the install directory.",
    )
    keystore_placeholder: str = Field(
        default=KEYSTORE_PLACEHOLDER_DEFAULT,
        description="Keystore file name replaced with '<server_ip>.jks'.",
    )
    user_manager_jar: str = Field(default=USER_MANAGER_JAR_DEFAULT)
    settle_seconds: float = Field(default=SETTLE_SECONDS_DEFAULT, ge=0)
    web_ui_port: int = WEB_UI_PORT_DEFAULT


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="TAK_", env_nested_delimiter="__", extra="ignore"
    )

    # Certificate subject. None means "ask the operator".
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    organizational_unit: Optional[str] = None
    server_ip: Optional[str] = Field(
        default=None,
        description="Override for the detected primary IP address.",
    )

    assume_yes: bool = Field(default=False, description="Answer yes to every confirmation prompt.")
    interactive: bool = Field(default=True, description="Prompt for values that were not provided.")
    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT)
    use_color: bool = True

    prereqs: PrereqSettings = Field(default_factory=PrereqSettings)
    release: ReleaseSettings = Field(default_factory=ReleaseSettings)
    compose: ComposeSettings = Field(default_factory=ComposeSettings)
    subject_defaults: SubjectDefaults = Field(default_factory=SubjectDefaults)
    certificates: CertificateSettings = Field(default_factory=CertificateSettings)
    post_provision: PostProvisionSettings = Field(default_factory=PostProvisionSettings)

    # Static symbols, could also be loaded from a separate static config if preferred
    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))
