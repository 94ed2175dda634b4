"""Structured logging for kelma.

Every module logs through structlog with snake_case event names and
keyword context, e.g. ``logger.debug("review_submitted", item_id=...)``.
Rendering is either colored console output or one JSON object per
line; learner answers contain Maltese letters, so JSON is written
without ASCII escaping.

Logging is configured with defaults on first import. Hosts reconfigure
it explicitly, or from a ``KelmaConfig`` via ``configure_from_config``.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from kelma.config import KelmaConfig

__all__ = [
    "configure_from_config",
    "configure_logging",
    "get_logger",
]


def _renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    level: int | str = logging.INFO,
    json_output: bool = False,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        json_output: If True, render JSON lines; otherwise console output
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.StackInfoRenderer(),
            _renderer(json_output),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)


def configure_from_config(config: "KelmaConfig") -> None:
    """Apply the logging fields of a KelmaConfig."""
    configure_logging(level=config.log_level, json_output=config.log_json)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Logger name (usually __name__ of the calling module)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)


if not structlog.is_configured():
    configure_logging()
