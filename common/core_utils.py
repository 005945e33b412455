#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core utility functions for the project.

This module provides helper functions for:
- Logging setup, including the level-to-colour table used for terminal output.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from tak_setup.config_models import SYMBOLS_DEFAULT

module_logger = logging.getLogger(__name__)

# Sits between INFO and WARNING so "success" lines pass an INFO threshold.
SUCCESS: int = 25
logging.addLevelName(SUCCESS, "SUCCESS")

COLOR_RESET = "\033[0m"

# Built once at import; every handler shares it.
LEVEL_STYLES: Dict[int, Dict[str, str]] = {
    logging.DEBUG: {"symbol_key": "debug", "color": ""},
    logging.INFO: {"symbol_key": "info", "color": "\033[96m"},
    SUCCESS: {"symbol_key": "success", "color": "\033[92m"},
    logging.WARNING: {"symbol_key": "warning", "color": "\033[93m"},
    logging.ERROR: {"symbol_key": "error", "color": "\033[91m"},
    logging.CRITICAL: {"symbol_key": "critical", "color": "\033[91m"},
}

DETAILED_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"
SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER = (
    "{log_prefix}%(asctime)s - %(levelname)s - %(message)s"
)
SIMPLE_LOG_FORMAT_NO_PREFIX = "%(asctime)s - %(levelname)s - %(message)s"


class SymbolFormatter(logging.Formatter):
    """
    A formatter that exposes a per-level ``symbol`` attribute and, when
    enabled, wraps the whole line in the level's ANSI colour.
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        validate=True,
        symbols=None,
        use_color: bool = False,
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT
        self.use_color = use_color

    def format(self, record):
        style = LEVEL_STYLES.get(record.levelno)
        if style:
            record.symbol = self.symbols.get(style["symbol_key"], "")
        else:
            record.symbol = ""

        line = super().format(record)
        if self.use_color and style and style["color"]:
            return f"{style['color']}{line}{COLOR_RESET}"
        return line


def stream_supports_color(stream) -> bool:
    """True when ``stream`` is an interactive terminal."""
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
    log_prefix: Optional[str] = None,
    use_color: Optional[bool] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures logging for the installer.

    Console output goes to stdout and is coloured per level when stdout is a
    terminal (or when ``use_color`` forces it). A file handler is added only
    when ``log_file`` is given; file output is never coloured.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO.
    log_file: Optional[str]
        The file path for the log file. Defaults to None.
    log_to_console: bool
        Whether to log to the console (stdout). Defaults to True.
    log_format_str: Optional[str]
        A custom log format string. May contain ``{log_prefix}``.
    log_prefix: Optional[str]
        An optional string to prefix log messages with.
    use_color: Optional[bool]
        Force colour on or off. None means "colour if stdout is a TTY".
    symbols: Optional[Dict[str, str]]
        Symbol table passed to the formatter.

    Returns:
    None
    """
    console_handlers: List[logging.Handler] = []
    file_handlers: List[logging.Handler] = []
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handlers.append(logging.FileHandler(log_file_path, mode="a"))
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    if log_to_console or not file_handlers:
        console_handlers.append(logging.StreamHandler(sys.stdout))

    actual_prefix = (
        (log_prefix.strip() + " ")
        if log_prefix and log_prefix.strip()
        else ""
    )

    final_format_str: str
    if log_format_str:
        if "{log_prefix}" in log_format_str:
            final_format_str = log_format_str.format(log_prefix=actual_prefix)
        else:
            final_format_str = actual_prefix + log_format_str
    elif actual_prefix:
        final_format_str = SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER.format(
            log_prefix=actual_prefix
        )
    else:
        final_format_str = SIMPLE_LOG_FORMAT_NO_PREFIX

    console_color = (
        stream_supports_color(sys.stdout) if use_color is None else use_color
    )

    for handler in console_handlers:
        handler.setFormatter(
            SymbolFormatter(
                fmt=final_format_str,
                datefmt="%Y-%m-%d %H:%M:%S",
                symbols=symbols,
                use_color=console_color,
            )
        )
    for handler in file_handlers:
        handler.setFormatter(
            SymbolFormatter(
                fmt=DETAILED_LOG_FORMAT,
                datefmt="%Y-%m-%d %H:%M:%S",
                symbols=symbols,
            )
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in console_handlers + file_handlers:
        root_logger.addHandler(handler)

    module_logger.debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. Format: '{final_format_str}'"
    )
