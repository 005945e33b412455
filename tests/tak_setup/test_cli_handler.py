import pytest

from tak_setup.cli_handler import (
    cli_confirm,
    cli_prompt_with_default,
    view_configuration,
)
from tak_setup.config_models import AppSettings


@pytest.fixture
def interactive_settings():
    return AppSettings(interactive=True)


def _fail_input(prompt=""):
    raise AssertionError(f"unexpected prompt: {prompt}")


@pytest.mark.parametrize(
    "answer, expected",
    [("y", True), ("Y", True), ("yes", True), ("n", False), ("No", False), ("", False), ("maybe", False)],
)
def test_cli_confirm_answers(
    monkeypatch, interactive_settings, mock_logger, answer, expected
):
    monkeypatch.setattr("builtins.input", lambda prompt="": answer)

    assert (
        cli_confirm("Do you want to remove it?", interactive_settings, mock_logger)
        is expected
    )


def test_cli_confirm_eof_declines(monkeypatch, interactive_settings, mock_logger):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)

    assert cli_confirm("Continue?", interactive_settings, mock_logger) is False
    mock_logger.warning.assert_called_once()


def test_cli_confirm_assume_yes_skips_prompt(monkeypatch, mock_logger):
    monkeypatch.setattr("builtins.input", _fail_input)
    settings = AppSettings(assume_yes=True, interactive=True)

    assert cli_confirm("Continue?", settings, mock_logger) is True


@pytest.mark.parametrize("default", [True, False])
def test_cli_confirm_non_interactive_uses_default(
    monkeypatch, mock_logger, default
):
    monkeypatch.setattr("builtins.input", _fail_input)
    settings = AppSettings(interactive=False)

    assert (
        cli_confirm(
            "Continue?", settings, mock_logger, non_interactive_default=default
        )
        is default
    )


@pytest.mark.parametrize(
    "answer, expected", [("", "US"), ("  CA  ", "CA"), ("New Zealand", "New Zealand")]
)
def test_cli_prompt_with_default(
    monkeypatch, interactive_settings, mock_logger, answer, expected
):
    prompts = []

    def fake_input(prompt=""):
        prompts.append(prompt)
        return answer

    monkeypatch.setattr("builtins.input", fake_input)

    value = cli_prompt_with_default(
        "Country (for cert generation)", "US", interactive_settings, mock_logger
    )

    assert value == expected
    assert prompts == ["Country (for cert generation). Default [US] : "]


def test_cli_prompt_with_default_eof(monkeypatch, interactive_settings, mock_logger):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)

    assert cli_prompt_with_default("City", "city", interactive_settings, mock_logger) == "city"


def test_cli_prompt_with_default_non_interactive(monkeypatch, mock_logger):
    monkeypatch.setattr("builtins.input", _fail_input)

    assert (
        cli_prompt_with_default("City", "city", AppSettings(interactive=False), mock_logger)
        == "city"
    )


def test_view_configuration_marks_unset_subject(mock_logger):
    view_configuration(AppSettings(country="CA"), mock_logger)

    (message,), _ = mock_logger.info.call_args
    lines = [" ".join(line.split()) for line in message.splitlines()]
    assert "Country: CA" in lines
    assert "State: [prompt]" in lines
    assert "Server IP: [detect]" in lines
