"""Structured logging setup for Quick Class Selector.

The terminal belongs to the TUI, so every event goes to a JSON-lines file
instead of stdout/stderr. Event names are snake_case and prefixed by the
component that emits them:

- ``class_store_*``: list mutations and save/import round-trips
  (``class_store_entry_added``, ``class_store_save_failed``)
- ``backend_*`` / ``file_backend_*``: gateway requests and store files
- ``user_action_*``: keys and buttons in the manager and the selector
- ``config_*``: configuration loading

Inspect the log with jq::

    tail -f ~/.cache/quickclass/logs/quickclass.log | jq 'select(.level != "debug")'
"""

import structlog
from pathlib import Path
from typing import Any, Optional
import os


LOG_LEVEL_ENV = "QUICKCLASS_LOG_LEVEL"
LOG_FILE_NAME = "quickclass.log"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def default_log_dir() -> Path:
    """~/.cache/quickclass/logs, resolved against the current HOME."""
    return Path.home() / ".cache" / "quickclass" / "logs"


def resolve_log_level() -> str:
    """Level named by QUICKCLASS_LOG_LEVEL; INFO when unset or unknown."""
    level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    return level if level in VALID_LEVELS else "INFO"


def configure_logging(log_dir: Optional[Path] = None) -> Path:
    """
    Route structlog output to the quickclass log file.

    DEBUG adds the form fields posted to admin-ajax and page-window
    changes; INFO records user actions and round-trip outcomes.

    Args:
        log_dir: Directory for quickclass.log (default: default_log_dir())

    Returns:
        Path of the log file
    """
    log_dir = log_dir or default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level()),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=open(log_file, "a", encoding="utf-8")),
        cache_logger_on_first_use=True,
    )

    return log_file


def get_logger(name: str) -> Any:
    """Named structlog logger, e.g. ``get_logger(__name__).info("config_loaded")``."""
    return structlog.get_logger(name)
