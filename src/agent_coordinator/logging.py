"""Logging configuration for the agent coordinator.

Every record emitted while a coordination run is active carries that run's
id as ``run_id`` (``-`` outside a run), so the interleaved output of
concurrent coordinations can be told apart.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .config import Settings

LOGGER_NAME = "agent_coordinator"
LOG_LEVEL_ENV = "AGENT_COORDINATOR_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(run_id)s] %(message)s"

_current_run_id: ContextVar[str] = ContextVar("coordination_run_id", default="-")


class RunIdFilter(logging.Filter):
    """Stamp records with the id of the active coordination run."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _current_run_id.get()
        return True


@contextmanager
def run_context(run_id: str) -> Iterator[str]:
    """Mark the enclosed code as belonging to coordination run ``run_id``."""
    token = _current_run_id.set(run_id)
    try:
        yield run_id
    finally:
        _current_run_id.reset(token)


def current_run_id() -> str:
    return _current_run_id.get()


def setup_logging(level: str | None = None, settings: Settings | None = None) -> logging.Logger:
    """Configure logging for the agent coordinator.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR).
               If not provided, checks AGENT_COORDINATOR_LOG_LEVEL env var,
               then ``settings.log_level`` (which also reads ``.env``).
               Defaults to WARNING if none is set.
        settings: Optional settings consulted after the environment.

    Returns:
        The configured root logger for the agent_coordinator package.
    """
    # resolve log level: explicit > env var > settings > default
    resolved_level = (
        level
        or os.environ.get(LOG_LEVEL_ENV)
        or (settings.log_level if settings is not None else None)
        or "WARNING"
    ).upper()

    numeric_level = getattr(logging, resolved_level, None)
    if not isinstance(numeric_level, int):
        print(f"Warning: Invalid log level '{resolved_level}', using WARNING", file=sys.stderr)
        numeric_level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # one handler, however often this is called
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.addFilter(RunIdFilter())
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger instance for the module.
    """
    return logging.getLogger(name)
