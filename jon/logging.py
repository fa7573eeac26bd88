"""
Logging setup for the jon command-line tool.

Library modules only emit DEBUG records through get_logger(). Handlers
are installed by the entry point via setup_logging(): a console handler
on stderr (colored on a TTY) and an optional rotating log file.
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from pathlib import Path


ROOT_LOGGER = "jon"


class Colors:
    """ANSI escape sequences used by ColoredFormatter."""

    RESET = "\033[0m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.DIM,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.RED,
}

# Keyed by the component part of the logger name (jon.<component>)
COMPONENT_COLORS = {
    "lexer": Colors.MAGENTA,
    "parser": Colors.BLUE,
    "schema": Colors.CYAN,
    "loader": Colors.CYAN,
    "main": Colors.GREEN,
}

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{Colors.RESET}" if color else text


class PlainFormatter(logging.Formatter):
    """Formatter that pads the level name so columns line up."""

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        record.levelname = self.format_level(record)
        try:
            return super().format(record)
        finally:
            record.levelname = levelname

    def format_level(self, record: logging.LogRecord) -> str:
        return f"{record.levelname:8}"


class ColoredFormatter(PlainFormatter):
    """
    Formatter that colors the level, the component name and, for
    warnings and errors, the message itself.

    The record is restored after formatting so other handlers see the
    original values.
    """

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format_level(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return record.levelname
        return _paint(super().format_level(record), LEVEL_COLORS.get(record.levelno, ""))

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        name, msg = record.name, record.msg
        component = name.rsplit(".", 1)[-1]
        record.name = _paint(name, COMPONENT_COLORS.get(component, ""))
        if record.levelno >= logging.WARNING:
            record.msg = _paint(str(msg), Colors.RED if record.levelno >= logging.ERROR else Colors.YELLOW)
        try:
            return super().format(record)
        finally:
            record.name, record.msg = name, msg


@dataclass
class LogConfig:
    """Logging configuration built by the command line."""

    console_level: str = "WARNING"
    console_colors: bool = True

    file_enabled: bool = False
    file_path: str = "jon.log"
    file_level: str = "DEBUG"
    file_max_bytes: int = 1024 * 1024
    file_backup_count: int = 3

    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    # Component name -> level, e.g. {"parser": "debug"}
    module_levels: dict[str, str] | None = None


def get_log_level(level_str: str) -> int:
    """Convert a level name to its logging constant. Unknown names map to INFO."""
    return LEVELS.get(level_str.lower(), logging.INFO)


def _console_handler(config: LogConfig) -> logging.Handler:
    # stderr keeps stdout clean for --dump output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(get_log_level(config.console_level))
    use_colors = config.console_colors and getattr(sys.stderr, "isatty", lambda: False)()
    handler.setFormatter(ColoredFormatter(config.format, config.date_format, use_colors=use_colors))
    return handler


def _file_handler(config: LogConfig) -> logging.Handler:
    log_path = Path(config.file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=config.file_max_bytes,
        backupCount=config.file_backup_count,
        encoding="utf-8",
    )
    handler.setLevel(get_log_level(config.file_level))
    handler.setFormatter(PlainFormatter(config.format, config.date_format))
    return handler


def setup_logging(config: LogConfig | None = None) -> None:
    """
    Install handlers on the jon root logger, replacing any from a previous call.

    Args:
        config: Logging configuration (uses defaults if None)
    """
    config = config or LogConfig()

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)  # handlers filter
    root_logger.handlers.clear()

    root_logger.addHandler(_console_handler(config))
    if config.file_enabled:
        root_logger.addHandler(_file_handler(config))

    for module_name, level_str in (config.module_levels or {}).items():
        get_logger(module_name).setLevel(get_log_level(level_str))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a component, prefixing the name with 'jon.' when needed."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
