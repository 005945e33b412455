import logging

import pytest

from common.core_utils import (
    COLOR_RESET,
    SUCCESS,
    SymbolFormatter,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _record(level: int, message: str = "msg") -> logging.LogRecord:
    return logging.LogRecord("test", level, __file__, 1, message, None, None)


def test_success_level_is_registered():
    assert logging.getLevelName(SUCCESS) == "SUCCESS"
    assert logging.INFO < SUCCESS < logging.WARNING


@pytest.mark.parametrize(
    "level, color, symbol",
    [
        (logging.INFO, "\033[96m", "ℹ️"),
        (SUCCESS, "\033[92m", "✅"),
        (logging.WARNING, "\033[93m", "⚠️"),
        (logging.ERROR, "\033[91m", "❌"),
    ],
)
def test_symbol_formatter_colors_by_level(level, color, symbol):
    formatter = SymbolFormatter(fmt="%(symbol)s %(message)s", use_color=True)

    line = formatter.format(_record(level))

    assert line == f"{color}{symbol} msg{COLOR_RESET}"


def test_symbol_formatter_without_color_is_plain():
    formatter = SymbolFormatter(fmt="%(symbol)s %(message)s")

    assert formatter.format(_record(logging.ERROR)) == "❌ msg"


def test_symbol_formatter_uses_custom_symbols():
    formatter = SymbolFormatter(
        fmt="%(symbol)s|%(message)s", symbols={"warning": "!"}
    )

    assert formatter.format(_record(logging.WARNING)) == "!|msg"


def test_setup_logging_replaces_root_handlers(restore_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "setup.log"

    setup_logging(
        log_level=logging.DEBUG,
        log_file=str(log_file),
        log_prefix="[TAK-SETUP]",
        use_color=False,
    )

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert all(isinstance(h.formatter, SymbolFormatter) for h in root.handlers)
    assert log_file.parent.is_dir()

    logging.getLogger("tak_setup").log(SUCCESS, "written")
    for handler in root.handlers:
        handler.flush()
    assert "SUCCESS" in log_file.read_text(encoding="utf-8")


def test_setup_logging_prefix_in_console_format(restore_root_logger):
    setup_logging(log_prefix="[TAK-SETUP]", use_color=False)

    (handler,) = restore_root_logger.handlers
    assert handler.formatter._fmt.startswith("[TAK-SETUP] ")
