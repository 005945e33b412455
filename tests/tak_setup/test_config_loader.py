import argparse

import pytest

from tak_setup.config_loader import _deep_update, load_app_settings


def _cli(**overrides) -> argparse.Namespace:
    values = dict(
        country=None,
        state=None,
        city=None,
        org_unit=None,
        server_ip=None,
        yes=False,
        non_interactive=False,
        no_color=False,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


def test_deep_update_merges_nested_and_skips_none():
    source = {"a": 1, "nested": {"x": 1, "y": 2}}

    result = _deep_update(source, {"a": None, "nested": {"y": 3}, "b": None})

    assert result == {"a": 1, "nested": {"x": 1, "y": 3}, "b": None}


def test_defaults_when_no_file(tmp_path, mock_logger):
    settings = load_app_settings(
        config_file_path=str(tmp_path / "absent.yaml"),
        current_logger=mock_logger,
    )

    assert settings.country is None
    assert settings.interactive is True
    assert settings.certificates.max_attempts == 6
    assert settings.certificates.retry_delay_seconds == 10
    assert settings.prereqs.ports == [5432, 8089, 8443, 8444, 8446, 9000, 9001]
    assert settings.compose.arm_file == "docker-compose.arm.yml"


def test_yaml_values_merge_with_defaults(tmp_path, mock_logger):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "country: CA\ncertificates:\n  max_attempts: 3\n", encoding="utf-8"
    )

    settings = load_app_settings(
        config_file_path=str(config_file), current_logger=mock_logger
    )

    assert settings.country == "CA"
    assert settings.certificates.max_attempts == 3
    assert settings.certificates.ca_name == "CRFtakserver"


def test_environment_is_read(tmp_path, monkeypatch, mock_logger):
    monkeypatch.setenv("TAK_COUNTRY", "DE")
    monkeypatch.setenv("TAK_CERTIFICATES__MAX_ATTEMPTS", "2")

    settings = load_app_settings(
        config_file_path=str(tmp_path / "absent.yaml"),
        current_logger=mock_logger,
    )

    assert settings.country == "DE"
    assert settings.certificates.max_attempts == 2


def test_yaml_overrides_environment(tmp_path, monkeypatch, mock_logger):
    monkeypatch.setenv("TAK_COUNTRY", "DE")
    config_file = tmp_path / "config.yaml"
    config_file.write_text("country: CA\n", encoding="utf-8")

    settings = load_app_settings(
        config_file_path=str(config_file), current_logger=mock_logger
    )

    assert settings.country == "CA"


def test_cli_overrides_yaml(tmp_path, mock_logger):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("country: CA\ncity: Halifax\n", encoding="utf-8")

    settings = load_app_settings(
        cli_args=_cli(
            country="FR",
            org_unit="ops",
            yes=True,
            non_interactive=True,
            no_color=True,
        ),
        config_file_path=str(config_file),
        current_logger=mock_logger,
    )

    assert settings.country == "FR"
    assert settings.city == "Halifax"
    assert settings.organizational_unit == "ops"
    assert settings.assume_yes is True
    assert settings.interactive is False
    assert settings.use_color is False


def test_non_mapping_yaml_is_ignored(tmp_path, mock_logger):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("- a\n- b\n", encoding="utf-8")

    settings = load_app_settings(
        config_file_path=str(config_file), current_logger=mock_logger
    )

    assert settings.country is None
    mock_logger.warning.assert_called_once()


def test_unparseable_yaml_is_ignored(tmp_path, mock_logger):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("country: [unclosed\n", encoding="utf-8")

    settings = load_app_settings(
        config_file_path=str(config_file), current_logger=mock_logger
    )

    assert settings.country is None
    mock_logger.warning.assert_called_once()


def test_invalid_values_exit(tmp_path, mock_logger):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "certificates:\n  max_attempts: 0\n", encoding="utf-8"
    )

    with pytest.raises(SystemExit):
        load_app_settings(
            config_file_path=str(config_file), current_logger=mock_logger
        )
