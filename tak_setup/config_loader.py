# tak_setup/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the TAK server setup.

Handles loading settings from Pydantic model defaults, environment
variables, a YAML file and command-line arguments, applying this order of
precedence (later wins):
1. Pydantic Model Defaults
2. Environment Variables (``TAK_*``, loaded by Pydantic's BaseSettings)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"

# argparse dest -> top-level AppSettings field
_CLI_FIELD_MAP: Dict[str, str] = {
    "country": "country",
    "state": "state",
    "city": "city",
    "org_unit": "organizational_unit",
    "server_ip": "server_ip",
}


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates ``source`` with values from ``overrides``.

    Nested dictionaries are merged key by key; any other value replaces the
    one in ``source``. ``None`` in ``overrides`` never clears an existing
    value.

    Returns:
        The updated ``source`` dictionary (modified in place).
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _read_yaml_file(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.debug(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}
    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data and isinstance(yaml_data, dict):
        logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
        return yaml_data
    if yaml_data is not None:
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
    return {}


def _cli_overrides(cli_args: argparse.Namespace) -> Dict[str, Any]:
    cli_arg_dict = vars(cli_args)
    overrides: Dict[str, Any] = {}

    for cli_key, field_name in _CLI_FIELD_MAP.items():
        cli_value = cli_arg_dict.get(cli_key)
        if cli_value is not None:
            overrides[field_name] = cli_value

    if cli_arg_dict.get("yes"):
        overrides["assume_yes"] = True
    if cli_arg_dict.get("non_interactive"):
        overrides["interactive"] = False
    if cli_arg_dict.get("no_color"):
        overrides["use_color"] = False
    return overrides


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Build the effective ``AppSettings``.

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file. Defaults to
            ``config.yaml`` in the working directory, which may be absent.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: The merged values fail validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # Model defaults < environment variables
    current_values_dict = AppSettings().model_dump(exclude_defaults=False)

    yaml_path = Path(config_file_path or DEFAULT_CONFIG_FILE)
    current_values_dict = _deep_update(
        current_values_dict, _read_yaml_file(yaml_path, logger_to_use)
    )

    if cli_args is not None:
        current_values_dict = _deep_update(
            current_values_dict, _cli_overrides(cli_args)
        )

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.debug(
        "Successfully loaded and validated application settings"
    )
    return final_settings
