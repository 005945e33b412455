# tak_setup/step_executor.py
# -*- coding: utf-8 -*-
"""
Provides functionality to execute individual setup steps.

A step is run once, its outcome is logged, and any exception it raises is
turned into a failure so the caller can stop the sequence cleanly.
"""

import logging
from typing import Any, Callable, Optional

from common.command_utils import log_setup
from tak_setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


class SetupAbortedError(Exception):
    """The operator declined an operation the run cannot continue without."""


def execute_step(
    step_tag: str,
    step_description: str,
    step_function: Callable[[AppSettings, Optional[logging.Logger]], Any],
    app_settings: AppSettings,
    current_logger_instance: Optional[logging.Logger],
) -> bool:
    """
    Execute a single setup step.

    Args:
        step_tag: A unique string identifier for the step.
        step_description: A human-readable description of the step.
        step_function: The function to call to execute the step.
                       Expected signature: (app_settings: AppSettings, current_logger: Optional[logging.Logger]) -> Any
                       Should return False to indicate failure. Any other return value (including None) is
                       considered success. An exception will always be treated as a failure.
        app_settings: The application settings object.
        current_logger_instance: The logger instance to use.

    Returns:
        True if the step succeeded, False if it failed.
    """
    logger_to_use = (
        current_logger_instance if current_logger_instance else module_logger
    )
    symbols = app_settings.symbols

    log_setup(
        f"--- {symbols.get('step', '➡️')} {step_description} ({step_tag}) ---",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        step_result = step_function(app_settings, logger_to_use)
    except SetupAbortedError as e:
        log_setup(
            f"{symbols.get('error', '❌')} {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        return False
    except Exception as e:
        log_setup(
            f"{symbols.get('error', '❌')} FAILED: {step_description} ({step_tag})",
            "error",
            logger_to_use,
            app_settings,
        )
        log_setup(
            f"   Error details: {str(e)}",
            "error",
            logger_to_use,
            app_settings,
            exc_info=logger_to_use.isEnabledFor(logging.DEBUG),
        )
        return False

    if step_result is False:
        log_setup(
            f"{symbols.get('error', '❌')} FAILED: {step_description} ({step_tag})",
            "error",
            logger_to_use,
            app_settings,
        )
        return False

    log_setup(
        f"{symbols.get('success', '✅')} Completed: {step_description} ({step_tag})",
        "debug",
        logger_to_use,
        app_settings,
    )
    return True
