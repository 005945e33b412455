# tests/conftest.py
import logging
import os
from unittest.mock import MagicMock

import pytest

from common.core_utils import SUCCESS
from stages.context import RunContext
from tak_setup.config_models import AppSettings, ReleaseSettings
from tak_setup.external_tools import ExternalTools

TOOL_METHODS = [
    "extract_archive",
    "remove_volume",
    "compose_up",
    "compose_stop",
    "compose_restart",
    "compose_exec",
]


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep the developer's TAK_* and sudo variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("TAK_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("SUDO_UID", raising=False)
    monkeypatch.delenv("SUDO_GID", raising=False)


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def app_settings(tmp_path):
    """Non-interactive settings with a scratch directory under tmp_path."""
    return AppSettings(
        interactive=False,
        release=ReleaseSettings(scratch_dir=str(tmp_path / "scratch")),
    )


@pytest.fixture
def mock_tools():
    """ExternalTools double whose operations all succeed."""
    tools = MagicMock(spec=ExternalTools)
    for name in TOOL_METHODS:
        getattr(tools, name).return_value = True
    return tools


@pytest.fixture
def work_dir(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def run_context(app_settings, work_dir, mock_tools):
    return RunContext(
        app_settings=app_settings,
        work_dir=work_dir,
        tools=mock_tools,
        sleep=MagicMock(),
    )


@pytest.fixture
def logged(mock_logger):
    """Return the messages sent to ``mock_logger`` at a named level."""

    def messages(level):
        if level == "success":
            return [
                c.args[1]
                for c in mock_logger.log.call_args_list
                if c.args and c.args[0] == SUCCESS
            ]
        return [c.args[0] for c in getattr(mock_logger, level).call_args_list]

    return messages
