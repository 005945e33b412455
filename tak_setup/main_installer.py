# tak_setup/main_installer.py
# -*- coding: utf-8 -*-
"""
Main entry point for the TAK server setup.

Parses the command line, loads settings, configures logging and runs every
installer stage once, in order.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from common.command_utils import log_setup
from common.core_utils import setup_logging
from stages.context import RunContext
from stages.orchestrator import StageOrchestrator
from tak_setup import config as static_config
from tak_setup.cli_handler import view_configuration
from tak_setup.config_loader import load_app_settings
from tak_setup.external_tools import ExternalTools

logger = logging.getLogger("tak_setup")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments. Every flag is optional."""
    parser = argparse.ArgumentParser(
        description="Set up a TAK server from a vendor release archive using docker compose.",
        epilog="With no flags the installer prompts for everything it needs.",
    )
    parser.add_argument(
        "--config-file",
        default=None,
        help="YAML configuration file (default: config.yaml if present).",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Answer yes to every confirmation prompt.",
    )
    parser.add_argument(
        "--non-interactive",
        action="store_true",
        help="Never prompt; use configured values or defaults.",
    )

    subject = parser.add_argument_group("certificate subject")
    subject.add_argument("--country", default=None)
    subject.add_argument("--state", default=None)
    subject.add_argument("--city", default=None)
    subject.add_argument("--org-unit", dest="org_unit", default=None)
    parser.add_argument(
        "--server-ip",
        default=None,
        help="Use this address instead of the detected primary IP.",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable coloured output."
    )
    parser.add_argument(
        "--log-file", default=None, help="Also write the log to this file."
    )
    parser.add_argument(
        "--view-config",
        action="store_true",
        help="Show the effective configuration and exit.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {static_config.SCRIPT_VERSION}",
    )
    return parser.parse_args(args)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the installer.

    Returns:
        0 when every stage succeeded, 1 on any failure, 130 when interrupted.
    """
    args = parse_args(argv)
    app_settings = load_app_settings(
        cli_args=args, config_file_path=args.config_file
    )

    setup_logging(
        log_level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        log_prefix=app_settings.log_prefix,
        use_color=None if app_settings.use_color else False,
        symbols=app_settings.symbols,
    )
    symbols = app_settings.symbols

    if args.view_config:
        view_configuration(app_settings, logger)
        return EXIT_SUCCESS

    context = RunContext(
        app_settings=app_settings,
        work_dir=Path.cwd(),
        tools=ExternalTools(app_settings, logger),
    )

    try:
        orchestrator = StageOrchestrator(app_settings, context, logger)
        succeeded = orchestrator.run_all()
    except KeyboardInterrupt:
        log_setup(
            f"{symbols.get('warning', '⚠️')} Interrupted by user.",
            "warning",
            logger,
            app_settings,
        )
        return EXIT_INTERRUPTED

    if not succeeded:
        log_setup(
            f"{symbols.get('error', '❌')} Setup failed.",
            "error",
            logger,
            app_settings,
        )
        return EXIT_FAILURE

    log_setup(
        f"{symbols.get('rocket', '🚀')} Setup completed. Access the server at "
        f"https://{context.server_ip}:{app_settings.post_provision.web_ui_port}",
        "success",
        logger,
        app_settings,
    )
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
