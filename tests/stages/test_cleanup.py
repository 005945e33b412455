import pytest

from stages.base_stage import SetupAbortedError
from stages.cleanup import CleanupStage


@pytest.fixture
def stage(app_settings, run_context, mock_logger):
    return CleanupStage(app_settings, run_context, mock_logger)


@pytest.fixture
def previous_install(run_context):
    marker = run_context.install_dir / "CoreConfig.xml"
    marker.parent.mkdir(parents=True)
    marker.write_text("<Configuration/>", encoding="utf-8")
    scratch = run_context.scratch_dir / "takserver-5.0-RELEASE" / "tak"
    scratch.mkdir(parents=True)
    return marker


def test_nothing_to_clean(stage, mock_tools, mocker):
    confirm = mocker.patch("stages.cleanup.cli_confirm")

    assert stage.run() is True

    confirm.assert_not_called()
    mock_tools.remove_volume.assert_not_called()


def test_declined_cleanup_aborts_and_keeps_files(
    stage, previous_install, mock_tools, run_context
):
    # Non-interactive without --yes declines.
    with pytest.raises(SetupAbortedError):
        stage.run()

    assert previous_install.exists()
    assert run_context.scratch_dir.exists()
    mock_tools.remove_volume.assert_not_called()


def test_confirmed_cleanup_removes_everything(
    stage, previous_install, mock_tools, run_context, mocker, logged
):
    confirm = mocker.patch("stages.cleanup.cli_confirm", return_value=True)

    assert stage.run() is True

    assert confirm.call_args.args[0] == "Do you want to remove it?"
    assert not run_context.install_dir.exists()
    assert not run_context.scratch_dir.exists()
    mock_tools.remove_volume.assert_called_once_with("tak-server_db_data")
    assert "Removed previous setup." in logged("success")


def test_assume_yes_confirms(
    app_settings, run_context, mock_logger, previous_install, mock_tools
):
    app_settings.assume_yes = True

    assert CleanupStage(app_settings, run_context, mock_logger).run() is True

    assert not previous_install.exists()


def test_volume_removal_failure_is_a_warning(
    stage, previous_install, mock_tools, mocker, logged
):
    mocker.patch("stages.cleanup.cli_confirm", return_value=True)
    mock_tools.remove_volume.return_value = False

    assert stage.run() is True

    assert any("tak-server_db_data" in m for m in logged("warning"))
