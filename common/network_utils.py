# common/network_utils.py
# -*- coding: utf-8 -*-
"""
Network-related utility functions.
"""

import logging
from typing import Iterable, List, Optional, Set

from common.command_utils import run_command
from tak_setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def parse_listening_ports(netstat_output: str) -> Set[int]:
    """
    Extract the local ports of listening TCP sockets from ``netstat -lnt``
    output.

    Only the local-address column is considered, so a port number that
    appears in a foreign address or elsewhere on the line does not count.
    """
    ports: Set[int] = set()
    for line in netstat_output.splitlines():
        fields = line.split()
        if len(fields) < 4 or not fields[0].startswith("tcp"):
            continue
        if len(fields) >= 6 and fields[5] != "LISTEN":
            continue
        local_address = fields[3]
        _, sep, port_str = local_address.rpartition(":")
        if sep and port_str.isdigit():
            ports.add(int(port_str))
    return ports


def get_listening_ports(
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Set[int]:
    """Return the set of TCP ports that currently have a listening socket."""
    logger_to_use = current_logger if current_logger else module_logger
    result = run_command(
        ["netstat", "-lnt"],
        app_settings,
        capture_output=True,
        check=True,
        current_logger=logger_to_use,
    )
    return parse_listening_ports(result.stdout or "")


def find_ports_in_use(
    ports: Iterable[int],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> List[int]:
    """Return the subset of ``ports`` that are already listening, in input order."""
    listening = get_listening_ports(app_settings, current_logger)
    return [port for port in ports if port in listening]
