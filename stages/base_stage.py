"""
Base stage class for all installer stages.

This module provides the base class that all stages must inherit from.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set

from stages.context import RunContext
from tak_setup.config_models import AppSettings
from tak_setup.step_executor import SetupAbortedError

__all__ = ["BaseStage", "SetupAbortedError"]


class BaseStage(ABC):
    """
    Base class for all installer stages.

    A stage performs one part of the setup sequence. ``run`` returns True on
    success and False on failure; it may also raise, which the step executor
    treats as failure.
    """

    # Class-level metadata that is replaced by the registry decorator
    metadata: Dict[str, Any] = {
        "dependencies": [],  # Names of stages that must run first
        "description": "",
    }

    def __init__(
        self,
        app_settings: AppSettings,
        context: RunContext,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the stage.

        Args:
            app_settings: The application settings.
            context: State shared by the stages of this run.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.context = context
        self.tools = context.tools
        self.symbols = app_settings.symbols
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def run(self) -> bool:
        """
        Perform the stage.

        Returns:
            True if the stage succeeded, False otherwise.
        """

    def get_dependencies(self) -> Set[str]:
        return set(self.metadata.get("dependencies", []))

    def get_description(self) -> str:
        return str(self.metadata.get("description", ""))
