import pytest

from stages.release import ReleaseStage


@pytest.fixture
def stage(app_settings, run_context, mock_logger):
    return ReleaseStage(app_settings, run_context, mock_logger)


def _unpacks(release_dirs=("takserver-5.0-RELEASE-29",)):
    """extract_archive side effect that lays out a release tree."""

    def extract(archive, destination):
        for name in release_dirs:
            tak = destination / name / "tak"
            tak.mkdir(parents=True)
            (tak / "CoreConfig.xml").write_text("<Configuration/>", encoding="utf-8")
        return True

    return extract


def test_no_release_file(stage, mock_tools, logged):
    assert stage.run() is False

    mock_tools.extract_archive.assert_not_called()
    assert any("No release file found" in m for m in logged("error"))


def test_checksums_are_reported(stage, work_dir, mock_tools, logged):
    (work_dir / "takserver-docker-5.0-RELEASE-29.zip").write_bytes(b"abc")
    mock_tools.extract_archive.side_effect = _unpacks()

    assert stage.run() is True

    info = logged("info")
    assert "File: takserver-docker-5.0-RELEASE-29.zip" in info
    assert "  sha1: a9993e364706816aba3e25717850c26c9cd0d89d" in info
    assert "  md5:  900150983cd24fb0d6963f7d28e17f72" in info


def test_first_archive_in_sorted_order_is_extracted(
    stage, work_dir, mock_tools, run_context
):
    (work_dir / "b-RELEASE-2.zip").write_bytes(b"b")
    (work_dir / "a-RELEASE-1.zip").write_bytes(b"a")
    (work_dir / "notes-RELEASE.txt").write_text("ignored", encoding="utf-8")
    mock_tools.extract_archive.side_effect = _unpacks()

    assert stage.run() is True

    archive, destination = mock_tools.extract_archive.call_args.args
    assert archive == work_dir / "a-RELEASE-1.zip"
    assert destination == run_context.scratch_dir
    assert (run_context.install_dir / "CoreConfig.xml").is_file()


def test_scratch_directory_is_cleared_first(
    stage, work_dir, mock_tools, run_context
):
    (work_dir / "a-RELEASE-1.zip").write_bytes(b"a")
    stale = run_context.scratch_dir / "old-RELEASE" / "tak"
    stale.mkdir(parents=True)

    def extract(archive, destination):
        assert not destination.exists()
        return _unpacks()(archive, destination)

    mock_tools.extract_archive.side_effect = extract

    assert stage.run() is True


def test_extraction_failure(stage, work_dir, mock_tools, run_context, logged):
    (work_dir / "a-RELEASE-1.zip").write_bytes(b"a")
    mock_tools.extract_archive.return_value = False

    assert stage.run() is False

    assert not run_context.install_dir.exists()
    assert any("Failed to extract" in m for m in logged("error"))


@pytest.mark.parametrize("release_dirs", [(), ("one", "two")])
def test_release_tree_must_be_unique(
    stage, work_dir, mock_tools, run_context, release_dirs
):
    (work_dir / "a-RELEASE-1.zip").write_bytes(b"a")
    mock_tools.extract_archive.side_effect = _unpacks(release_dirs)

    assert stage.run() is False

    assert not run_context.install_dir.exists()
