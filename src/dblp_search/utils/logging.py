"""
Logging configuration for dblp-search.

Library modules only create module loggers; handlers are installed by the
CLI (or by an embedding application) through :func:`setup_logging`.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - " "[%(filename)s:%(lineno)d] - %(message)s"
)
DATE_FORMAT = "%H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with a colored level name."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def level_from_verbosity(verbose: int = 0, quiet: bool = False) -> str:
    """Map CLI verbosity flags to a level name.

    Args:
        verbose: Count of ``-v`` flags (0=WARNING, 1=INFO, 2+=DEBUG)
        quiet: Only report errors

    Returns:
        Logging level name
    """
    if quiet:
        return "ERROR"
    if verbose == 0:
        return "WARNING"
    if verbose == 1:
        return "INFO"
    return "DEBUG"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    colored: bool = True,
) -> logging.Logger:
    """Configure the root logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a log file, written with a detailed format
        format_string: Console format (DEFAULT_FORMAT if None)
        colored: Use colored level names when stderr is a terminal

    Returns:
        Configured root logger

    Example:
        >>> logger = setup_logging(level="DEBUG", log_file=Path("dblp.log"))
        >>> logger.info("Client started")
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    format_string = format_string or DEFAULT_FORMAT

    # stdout carries command output (JSON/JSONL), so logs go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)

    console_formatter: Union[ColoredFormatter, logging.Formatter]
    if colored and sys.stderr.isatty():
        console_formatter = ColoredFormatter(format_string, datefmt=DATE_FORMAT)
    else:
        console_formatter = logging.Formatter(format_string, datefmt=DATE_FORMAT)

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        root_logger.addHandler(file_handler)

    return root_logger


def configure_library_logging(quiet: bool = False) -> None:
    """Reduce noise from the HTTP stack.

    Args:
        quiet: If True, set libraries to WARNING level; else INFO
    """
    library_level = logging.WARNING if quiet else logging.INFO

    for logger_name in ("urllib3", "requests", "charset_normalizer"):
        logging.getLogger(logger_name).setLevel(library_level)


class PerformanceLogger:
    """Context manager that logs how long an operation took.

    Example:
        >>> with PerformanceLogger("Searching publications", logger):
        ...     records = provider.search_publication("Paxos")
    """

    def __init__(
        self, operation: str, logger: Optional[logging.Logger] = None, level: str = "DEBUG"
    ):
        self.operation = operation
        self.logger = logger or logging.getLogger()
        self.level = getattr(logging, level.upper(), logging.DEBUG)
        self.start_time: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        import time

        self.start_time = time.perf_counter()
        self.logger.log(self.level, f"{self.operation} started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        import time

        if self.start_time is None:
            return

        elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation} completed in {elapsed:.2f}s")
        else:
            self.logger.log(
                logging.ERROR, f"{self.operation} failed after {elapsed:.2f}s: {exc_val}"
            )
