# stages/release.py
# -*- coding: utf-8 -*-
"""
Locate the vendor release archive, report its checksums and unpack it into
the install directory.
"""

import shutil
from pathlib import Path
from typing import List, Optional

from common.command_utils import log_setup
from common.file_utils import cleanup_directory, file_checksums
from stages.base_stage import BaseStage
from stages.registry import StageRegistry


@StageRegistry.register(
    name="release",
    metadata={
        "dependencies": ["cleanup"],
        "description": "Locate and extract the release archive",
    },
)
class ReleaseStage(BaseStage):
    """
    Picks the first archive matching the release glob, prints SHA1 and MD5
    for every match, extracts to the scratch directory and moves the single
    ``*/<subdirectory>`` found there into place.
    """

    def run(self) -> bool:
        log_setup(
            "Looking for release file...",
            "info",
            self.logger,
            self.app_settings,
        )
        archives = self.find_release_archives()
        if not archives:
            log_setup(
                f"{self.symbols.get('error', '❌')} No release file found. Please place it in the current directory.",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        self.report_checksums(archives)
        return self.extract(archives[0])

    def find_release_archives(self) -> List[Path]:
        pattern = self.app_settings.release.archive_glob
        return sorted(
            p for p in self.context.work_dir.glob(pattern) if p.is_file()
        )

    def report_checksums(self, archives: List[Path]) -> None:
        # Informational only; there is no trusted value to compare against.
        log_setup(
            "Release file checksums:",
            "info",
            self.logger,
            self.app_settings,
        )
        for archive in archives:
            sums = file_checksums(archive)
            log_setup(f"File: {archive.name}", "info", self.logger, self.app_settings)
            log_setup(f"  sha1: {sums['sha1']}", "info", self.logger, self.app_settings)
            log_setup(f"  md5:  {sums['md5']}", "info", self.logger, self.app_settings)

    def extract(self, archive: Path) -> bool:
        scratch = self.context.scratch_dir
        log_setup(
            f"Extracting {archive.name} to {scratch}...",
            "info",
            self.logger,
            self.app_settings,
        )
        cleanup_directory(scratch, self.app_settings, self.logger)

        if not self.tools.extract_archive(archive, scratch):
            log_setup(
                f"{self.symbols.get('error', '❌')} Failed to extract {archive.name}.",
                "error",
                self.logger,
                self.app_settings,
            )
            return False

        source = self._find_release_subdirectory(scratch)
        if source is None:
            return False

        shutil.move(str(source), str(self.context.install_dir))
        log_setup(
            "Extraction completed.",
            "success",
            self.logger,
            self.app_settings,
        )
        return True

    def _find_release_subdirectory(self, scratch: Path) -> Optional[Path]:
        subdir = self.app_settings.release.subdirectory
        candidates = sorted(
            p for p in scratch.glob(f"*/{subdir}") if p.is_dir()
        )
        if len(candidates) != 1:
            log_setup(
                f"{self.symbols.get('error', '❌')} Expected exactly one '*/{subdir}' directory in the release, found {len(candidates)}.",
                "error",
                self.logger,
                self.app_settings,
            )
            return None
        return candidates[0]
