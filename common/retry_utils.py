# common/retry_utils.py
# -*- coding: utf-8 -*-
"""
Bounded, whole-unit retry.

A unit of work is retried from the top: if any part of it fails, the entire
unit runs again after the delay. Sub-steps are never retried on their own.
"""

import logging
import time
from typing import Callable, Optional

from common.command_utils import get_symbols, log_setup
from tak_setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


class RetryPolicy:
    """
    Run a unit of work up to ``max_attempts`` times, sleeping
    ``delay_seconds`` before every attempt, the first included.

    The unit receives the 1-based attempt number and returns True on success
    and False on failure. An exception raised by the unit counts as a failed
    attempt.
    """

    def __init__(
        self,
        max_attempts: int,
        delay_seconds: float,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def run(
        self,
        unit_of_work: Callable[[int], bool],
        description: str = "operation",
        app_settings: Optional[AppSettings] = None,
        current_logger: Optional[logging.Logger] = None,
    ) -> bool:
        """
        Returns:
            True as soon as one attempt succeeds, False once every attempt
            has failed.
        """
        logger_to_use = current_logger if current_logger else module_logger
        symbols = get_symbols(app_settings)

        for attempt in range(1, self.max_attempts + 1):
            if self.delay_seconds:
                log_setup(
                    f"Waiting {self.delay_seconds:g}s before {description} (attempt {attempt}/{self.max_attempts})...",
                    "info",
                    logger_to_use,
                    app_settings,
                )
            self._sleep(self.delay_seconds)

            try:
                succeeded = unit_of_work(attempt)
            except Exception as e:
                log_setup(
                    f"{symbols.get('warning', '!')} {description} raised on attempt {attempt}: {e}",
                    "warning",
                    logger_to_use,
                    app_settings,
                    exc_info=logger_to_use.isEnabledFor(logging.DEBUG),
                )
                succeeded = False

            if succeeded:
                return True

            if attempt < self.max_attempts:
                log_setup(
                    f"{symbols.get('warning', '!')} {description} failed on attempt {attempt}/{self.max_attempts}. Retrying...",
                    "warning",
                    logger_to_use,
                    app_settings,
                )

        log_setup(
            f"{symbols.get('error', '❌')} {description} failed after {self.max_attempts} attempts.",
            "error",
            logger_to_use,
            app_settings,
        )
        return False
