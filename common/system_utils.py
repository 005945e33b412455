# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the TAK server setup.

This module includes functions for determining the primary IP address, the
host package architecture and the ids of the user who invoked the installer.
"""

import logging
import os
import platform
import socket
import subprocess
from typing import Optional, Tuple

from common.command_utils import get_symbols, log_setup, run_command
from tak_setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)

# uname machine names that dpkg reports as arm64.
_MACHINE_TO_DPKG_ARCH = {
    "aarch64": "arm64",
    "arm64": "arm64",
    "x86_64": "amd64",
    "amd64": "amd64",
}


def get_primary_ip_address(
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Get the primary IP address of the machine.

    This function determines the address of the interface used for outbound
    traffic by "connecting" a UDP socket to an external host. No packet is
    sent.

    Args:
        app_settings: Optional application settings for logging symbols.
        current_logger: Optional logger instance.

    Returns:
        The primary IP address as a string, or None if it cannot be determined.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        ip_address = s.getsockname()[0]
        return str(ip_address)
    except OSError as e:
        log_setup(
            f"{symbols.get('warning', '!')} Could not determine primary IP address: {e}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return None
    finally:
        s.close()


def get_host_architecture(
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Return the host package architecture as dpkg names it (e.g. ``amd64``,
    ``arm64``).

    ``dpkg --print-architecture`` is asked first; on hosts without dpkg the
    kernel machine name is mapped to the same vocabulary.
    """
    logger_to_use = current_logger if current_logger else module_logger
    try:
        result = run_command(
            ["dpkg", "--print-architecture"],
            app_settings,
            capture_output=True,
            check=True,
            current_logger=logger_to_use,
        )
        arch = result.stdout.strip()
        if arch:
            return arch
    except (FileNotFoundError, subprocess.CalledProcessError):
        log_setup(
            "dpkg unavailable, falling back to platform.machine()",
            "debug",
            logger_to_use,
            app_settings,
        )

    machine = platform.machine().lower()
    return _MACHINE_TO_DPKG_ARCH.get(machine, machine)


def get_invoking_user_ids() -> Tuple[int, int]:
    """
    Return ``(uid, gid)`` of the user who started the installer.

    When run through sudo the original user's ids are used so that files
    created for them stay writable after the installer exits.
    """
    sudo_uid = os.environ.get("SUDO_UID")
    sudo_gid = os.environ.get("SUDO_GID")
    if sudo_uid and sudo_gid and sudo_uid.isdigit() and sudo_gid.isdigit():
        return int(sudo_uid), int(sudo_gid)
    return os.getuid(), os.getgid()
