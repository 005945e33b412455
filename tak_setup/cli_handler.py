# tak_setup/cli_handler.py
# -*- coding: utf-8 -*-
"""
Handles Command Line Interface (CLI) interactions for the TAK server setup.
"""

import logging
from typing import Optional

from common.command_utils import log_setup
from tak_setup import config as static_config
from tak_setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def cli_confirm(
    prompt_message: str,
    app_settings: AppSettings,
    current_logger_instance: Optional[logging.Logger] = None,
    non_interactive_default: bool = False,
) -> bool:
    """
    Ask a yes/no question on the terminal.

    Parameters:
    prompt_message : str
        The question, without the "(y/n)" suffix.
    app_settings : AppSettings
        ``assume_yes`` answers True without asking; when ``interactive`` is
        off the question is not asked and ``non_interactive_default`` is
        returned.
    current_logger_instance : Optional[logging.Logger]
        The logger instance to use for logging.
    non_interactive_default : bool
        Answer used when prompting is disabled.

    Returns:
    bool
        True only if the answer starts with "y" or "Y". EOF counts as "no".
    """
    logger_to_use = (
        current_logger_instance if current_logger_instance else module_logger
    )
    symbols = app_settings.symbols

    if app_settings.assume_yes:
        log_setup(
            f"{prompt_message} (y/n): y [--yes]",
            "info",
            logger_to_use,
            app_settings,
        )
        return True
    if not app_settings.interactive:
        answer = "y" if non_interactive_default else "n"
        log_setup(
            f"{prompt_message} (y/n): {answer} [non-interactive]",
            "info",
            logger_to_use,
            app_settings,
        )
        return non_interactive_default

    try:
        user_input = input(f"{prompt_message} (y/n): ").strip().lower()
    except EOFError:
        log_setup(
            f"{symbols.get('warning', '!')} No user input (EOF), defaulting to 'n' for prompt: '{prompt_message}'",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False
    return user_input.startswith("y")


def cli_prompt_with_default(
    label: str,
    default: str,
    app_settings: AppSettings,
    current_logger_instance: Optional[logging.Logger] = None,
) -> str:
    """
    Ask for a free-text value; an empty answer, EOF or disabled prompting
    yields ``default``. The answer is not validated.
    """
    logger_to_use = (
        current_logger_instance if current_logger_instance else module_logger
    )
    if not app_settings.interactive:
        return default
    try:
        answer = input(f"{label}. Default [{default}] : ").strip()
    except EOFError:
        log_setup(
            f"No user input (EOF), using default '{default}' for {label}",
            "debug",
            logger_to_use,
            app_settings,
        )
        return default
    return answer or default


def view_configuration(
    app_config: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Log the effective configuration (CLI > environment > YAML > defaults).
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = app_config.symbols

    def show(value: Optional[str]) -> str:
        return value if value is not None else "[prompt]"

    config_text = f"{symbols.get('info', 'ℹ️')} Current effective configuration values:\n\n"
    config_text += f"  Country:                       {show(app_config.country)}\n"
    config_text += f"  State:                         {show(app_config.state)}\n"
    config_text += f"  City:                          {show(app_config.city)}\n"
    config_text += f"  Organizational Unit:           {show(app_config.organizational_unit)}\n"
    config_text += f"  Server IP:                     {app_config.server_ip or '[detect]'}\n"
    config_text += f"  Assume yes / interactive:      {app_config.assume_yes} / {app_config.interactive}\n\n"

    config_text += "  Prerequisites (prereqs.*):\n"
    config_text += f"    Commands:                    {', '.join(app_config.prereqs.commands)}\n"
    config_text += f"    Ports:                       {', '.join(str(p) for p in app_config.prereqs.ports)}\n\n"

    config_text += "  Release (release.*):\n"
    config_text += f"    Archive glob:                {app_config.release.archive_glob}\n"
    config_text += f"    Scratch dir:                 {app_config.release.scratch_dir}\n"
    config_text += f"    Install dir:                 {app_config.release.install_dir}\n"
    config_text += f"    DB volume:                   {app_config.release.db_volume}\n\n"

    config_text += "  Compose (compose.*):\n"
    config_text += f"    Command:                     {' '.join(app_config.compose.command)}\n"
    config_text += f"    Files (default / arm64):     {app_config.compose.file} / {app_config.compose.arm_file}\n"
    config_text += f"    Env file:                    {app_config.compose.env_file}\n"
    config_text += f"    Service:                     {app_config.compose.service}\n\n"

    config_text += "  Certificates (certificates.*):\n"
    config_text += f"    CA name:                     {app_config.certificates.ca_name}\n"
    config_text += f"    Client identity:             {app_config.certificates.client_identity}\n"
    config_text += f"    Attempts / delay:            {app_config.certificates.max_attempts} / {app_config.certificates.retry_delay_seconds:g}s\n\n"

    config_text += f"  Post-provisioning enabled:     {app_config.post_provision.enabled}\n"
    config_text += f"  Script Version (static):       {static_config.SCRIPT_VERSION}\n"

    log_setup(config_text, "info", logger_to_use, app_config)
