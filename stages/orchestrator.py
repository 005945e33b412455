"""
Orchestrator for the installer stages.

This module provides the StageOrchestrator class, which imports every stage
module, resolves stage dependencies and runs the stages in order, stopping
at the first failure.
"""

import importlib
import logging
import os
import pkgutil
from typing import List, Optional

from stages.context import RunContext
from stages.registry import StageRegistry
from tak_setup.config_models import AppSettings
from tak_setup.step_executor import execute_step

# Modules in this package that hold framework code rather than stages.
_FRAMEWORK_MODULES = {"base_stage", "context", "orchestrator", "registry"}


class StageOrchestrator:
    """
    Runs the registered installer stages for one setup pass.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        context: RunContext,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            app_settings: The application settings.
            context: State shared by the stages of this run.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.context = context
        self.logger = logger or logging.getLogger(self.__class__.__name__)

        self._import_stage_modules()

    def _import_stage_modules(self) -> None:
        """
        Import every stage module so its class registers with StageRegistry.
        """
        import stages

        stages_path = os.path.dirname(stages.__file__)
        for _, module_name, _ in pkgutil.iter_modules([stages_path]):
            if module_name in _FRAMEWORK_MODULES:
                continue
            importlib.import_module(f"stages.{module_name}")
            self.logger.debug(f"Imported stage module: {module_name}")

    def get_execution_order(
        self, stage_names: Optional[List[str]] = None
    ) -> List[str]:
        """
        Stage names in run order. With no names, every registered stage.
        """
        requested = (
            stage_names
            if stage_names
            else list(StageRegistry.get_all_stages().keys())
        )
        return StageRegistry.resolve_dependencies(requested)

    def run_all(self, stage_names: Optional[List[str]] = None) -> bool:
        """
        Run the stages in dependency order.

        Returns:
            True when every stage succeeded; False as soon as one fails. Later
            stages are not run after a failure.
        """
        for name in self.get_execution_order(stage_names):
            stage_class = StageRegistry.get_stage(name)
            stage = stage_class(self.app_settings, self.context, self.logger)

            succeeded = execute_step(
                name,
                stage.get_description(),
                lambda _settings, _logger: stage.run(),
                self.app_settings,
                self.logger,
            )
            if not succeeded:
                self.logger.debug(f"Stopping after failed stage '{name}'")
                return False
        return True
