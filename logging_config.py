"""
Structured logging configuration for the hr-analytics project.

This module provides a centralized way to configure logging across the application
with different log levels and output files for different concerns. Library code
only asks for named loggers; handlers are attached here, from the CLI.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional, Set

# Define logger names for different concerns
CALCULATION_LOGGER = "hr_analytics.calculation"
COHERENCE_LOGGER = "hr_analytics.coherence"
ERROR_LOGGER = "hr_analytics.errors"
DEBUG_LOGGER = "hr_analytics.debug"

DEFAULT_LOG_DIR = Path("output_dev/analytics_logs")

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

LOG_FILE_NAMES: List[str] = [
    "calculation_events.log",
    "coherence_checks.log",
    "warnings_errors.log",
    "debug_detail.log",
    "combined.log",
]

# Track if logging is already configured and log files
_LOGGING_CONFIGURED = False
_log_files_created: Set[Path] = set()
_combined_log_file: Optional[Path] = None


def clear_logs(log_dir: Path) -> None:
    """
    Clear all log files in the specified directory.

    Args:
        log_dir: Directory containing log files to clear
    """
    for name in LOG_FILE_NAMES:
        log_file = log_dir / name
        if log_file.exists():
            try:
                log_file.unlink()
            except OSError as e:
                logging.getLogger(__name__).warning(f"Could not delete {log_file}: {e}")


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
        mode="a",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    _log_files_created.add(path)
    return handler


def _attach(logger_name: str, handler: logging.Handler, level: int) -> logging.Logger:
    named = logging.getLogger(logger_name)
    for h in named.handlers[:]:
        named.removeHandler(h)
        h.close()
    named.setLevel(level)
    named.addHandler(handler)
    named.propagate = True  # Allow to bubble up to root
    return named


def setup_logging(log_dir: Path = DEFAULT_LOG_DIR, debug: bool = False, clear_existing: bool = True) -> None:
    """
    Configure structured logging for the application.

    Creates separate log files for different concerns:
    - calculation_events.log: Metric calculation events (INFO+)
    - coherence_checks.log: Price/Volume reconciliation checks (INFO+)
    - warnings_errors.log: Warnings and errors (WARNING+)
    - debug_detail.log: Detailed debug information (DEBUG, only if debug=True)
    - combined.log: Combined log of all messages (INFO+)

    Args:
        log_dir: Directory where log files will be stored
        debug: If True, enables debug logging and creates debug_detail.log
        clear_existing: If True, clears existing log files before starting
    """
    global _LOGGING_CONFIGURED, _combined_log_file

    if _LOGGING_CONFIGURED:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    if clear_existing:
        clear_logs(log_dir)

    _combined_log_file = log_dir / "combined.log"

    # Remove all handlers from the root logger before setup
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Formatters
    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_formatter = logging.Formatter("%(levelname)-8s %(message)s")

    # Console handler (for warnings and above)
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(console_formatter)
    root_logger.addHandler(console)

    root_logger.addHandler(_rotating_handler(_combined_log_file, logging.INFO, file_formatter))
    root_logger.addHandler(
        _rotating_handler(log_dir / "warnings_errors.log", logging.WARNING, file_formatter)
    )

    _attach(
        CALCULATION_LOGGER,
        _rotating_handler(log_dir / "calculation_events.log", logging.INFO, file_formatter),
        logging.INFO,
    )
    _attach(
        COHERENCE_LOGGER,
        _rotating_handler(log_dir / "coherence_checks.log", logging.INFO, file_formatter),
        logging.INFO,
    )

    if debug:
        _attach(
            DEBUG_LOGGER,
            _rotating_handler(log_dir / "debug_detail.log", logging.DEBUG, file_formatter),
            logging.DEBUG,
        )

    _LOGGING_CONFIGURED = True


def reset_logging() -> None:
    """Detach every handler installed by setup_logging so it can run again."""
    global _LOGGING_CONFIGURED, _combined_log_file

    for name in (None, CALCULATION_LOGGER, COHERENCE_LOGGER, DEBUG_LOGGER):
        target = logging.getLogger(name)
        for h in target.handlers[:]:
            target.removeHandler(h)
            h.close()
    _log_files_created.clear()
    _combined_log_file = None
    _LOGGING_CONFIGURED = False
