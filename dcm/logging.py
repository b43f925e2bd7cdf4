"""
Logging configuration for Daemon Config Manager.

Provides leveled, optionally colored logging under the ``dcm`` namespace.
"""

import logging
import sys
from types import TracebackType
from typing import Optional

RESET = "\033[0m"

# ANSI escape per level, applied to the level name only
LEVEL_COLORS = {
    logging.DEBUG: "\033[2m\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1m\033[41m\033[37m",
}


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name of each record."""

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: bool = True):
        """
        Args:
            fmt: Log message format
            datefmt: Date format
            use_colors: Emit ANSI colors (off for file output)
        """
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        if color is None:
            return super().format(record)
        # Color a copy so other handlers see the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{RESET}"
        return super().format(colored)


CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
CONSOLE_DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"

# Third-party loggers that flood DEBUG output
QUIET_LOGGERS = ("textual", "asyncio")


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        handler.setFormatter(ColoredFormatter(CONSOLE_DEBUG_FORMAT, datefmt="%H:%M:%S"))
    else:
        handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(FILE_FORMAT, use_colors=False))
    return handler


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, console: bool = True) -> None:
    """
    Configure logging for DCM.

    Replaces any handlers from an earlier call, so the CLI can log to the
    terminal while loading settings and then switch to file-only logging
    for the TUI.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        console: Attach a stderr handler. The TUI owns the terminal, so it
            runs with ``console=False`` and logs only to ``log_file``.

    Example:
        >>> setup_logging(level="DEBUG", log_file="dcm.log", console=False)
        >>> logger = get_logger(__name__)
        >>> logger.info("Session started")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    dcm_logger = logging.getLogger("dcm")
    dcm_logger.setLevel(numeric_level)
    for old in list(dcm_logger.handlers):
        dcm_logger.removeHandler(old)
        old.close()

    if console:
        dcm_logger.addHandler(_console_handler(numeric_level))
    if log_file:
        dcm_logger.addHandler(_file_handler(log_file, numeric_level))
    if not dcm_logger.handlers:
        dcm_logger.addHandler(logging.NullHandler())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger placed under the ``dcm`` namespace
    """
    if not name.startswith("dcm"):
        name = f"dcm.{name}"

    return logging.getLogger(name)


def format_exception_summary(
    error: BaseException,
    *,
    max_length: int = 180,
) -> str:
    """
    Build a concise one-line exception summary for user-facing messages.

    Args:
        error: Exception instance.
        max_length: Maximum output length.

    Returns:
        Single-line summary (trimmed when needed).
    """
    exception_name = error.__class__.__name__
    detail = " ".join(str(error or "").split())
    summary = exception_name if not detail else f"{exception_name}: {detail}"
    if max_length > 3 and len(summary) > max_length:
        return summary[: max_length - 3].rstrip() + "..."
    return summary


def exception_exc_info(
    error: BaseException,
) -> tuple[type[BaseException], BaseException, TracebackType | None]:
    """
    Build an ``exc_info`` tuple suitable for logger calls.

    Args:
        error: Exception instance.

    Returns:
        Tuple consumable by ``logging.Logger`` methods.
    """
    return (type(error), error, error.__traceback__)


def configure_logging_from_args(verbose: bool = False, log_level: Optional[str] = None,
                                log_file: Optional[str] = None, console: bool = True) -> None:
    """
    Configure logging based on CLI arguments.

    Args:
        verbose: If True, set level to DEBUG
        log_level: Explicit log level (overrides verbose)
        log_file: Optional file for log output
        console: Whether to log to stderr as well

    Example:
        >>> configure_logging_from_args(verbose=True)
        >>> configure_logging_from_args(log_level="WARNING", console=False)
    """
    level = log_level or ("DEBUG" if verbose else "INFO")
    setup_logging(level=level.upper(), log_file=log_file, console=console)
