# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions: removing paths, hashing files, writing the
compose environment file and patching text files in place.
"""

import hashlib
import logging
import shutil
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from common.command_utils import get_symbols, log_setup
from tak_setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)

CHECKSUM_CHUNK_SIZE = 1024 * 1024


def cleanup_directory(
    directory_path: Path,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Remove ``directory_path`` and everything below it.

    A missing path is not an error. A path that exists but is a plain file is
    unlinked. Removal errors propagate to the caller.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    log_setup(
        f"Attempting to clean directory: {directory_path}",
        "debug",
        logger_to_use,
        app_settings,
    )
    if directory_path.is_dir() and not directory_path.is_symlink():
        shutil.rmtree(directory_path)
        log_setup(
            f"{symbols.get('info', 'ℹ️')} Removed directory and its contents: {directory_path}",
            "debug",
            logger_to_use,
            app_settings,
        )
    elif directory_path.exists() or directory_path.is_symlink():
        directory_path.unlink()
        log_setup(
            f"{symbols.get('warning', '!')} Path {directory_path} was not a directory; removed it.",
            "warning",
            logger_to_use,
            app_settings,
        )
    else:
        log_setup(
            f"Directory {directory_path} does not exist. No cleanup needed.",
            "debug",
            logger_to_use,
            app_settings,
        )


def file_checksums(
    file_path: Path, algorithms: Sequence[str] = ("sha1", "md5")
) -> Dict[str, str]:
    """
    Hash ``file_path`` with each of ``algorithms`` in a single read.

    Returns:
        Mapping of algorithm name to hex digest.
    """
    hashers = {name: hashlib.new(name) for name in algorithms}
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(CHECKSUM_CHUNK_SIZE), b""):
            for hasher in hashers.values():
                hasher.update(chunk)
    return {name: hasher.hexdigest() for name, hasher in hashers.items()}


def write_env_file(
    env_path: Path,
    values: Mapping[str, str],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Write ``values`` as ``KEY=value`` lines, replacing any existing file.

    Values are written verbatim; nothing is quoted or escaped.
    """
    logger_to_use = current_logger if current_logger else module_logger
    content = "".join(f"{key}={value}\n" for key, value in values.items())
    env_path.write_text(content, encoding="utf-8")
    log_setup(
        f"Wrote {len(values)} entries to {env_path}",
        "debug",
        logger_to_use,
        app_settings,
    )


def replace_in_file(
    file_path: Path,
    old: str,
    new: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> int:
    """
    Replace every occurrence of ``old`` with ``new`` in ``file_path``.

    Returns:
        Number of replacements made. The file is only rewritten when that is
        non-zero.

    Raises:
        FileNotFoundError: ``file_path`` does not exist.
    """
    logger_to_use = current_logger if current_logger else module_logger
    content = file_path.read_text(encoding="utf-8")
    count = content.count(old)
    if count:
        file_path.write_text(content.replace(old, new), encoding="utf-8")
    log_setup(
        f"Replaced {count} occurrence(s) of '{old}' in {file_path}",
        "debug",
        logger_to_use,
        app_settings,
    )
    return count
