"""Structlog configuration and logger setup.

The library never configures logging on import. Its modules log through
get_module_logger() and inherit whatever the host application set up.
Applications without their own structlog setup may opt in once at startup:

Usage:
    from gettext_commons.logging import configure_logging, get_module_logger

    # Console output, level from settings.LOG_LEVEL
    configure_logging()

    # JSON lines for log shippers
    configure_logging(log_level="WARNING", json_output=True)

    logger = get_module_logger()
    logger.info("event_name", key="value")

Dependencies:
    - gettext_commons.configuration.settings
"""

import inspect
import logging
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from gettext_commons.configuration import settings


def configure_logging(
    log_level: Optional[str] = None,
    json_output: bool = False,
) -> BoundLogger:
    """Route structlog through the standard library at the given level.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, etc). Defaults to
            settings.LOG_LEVEL.
        json_output: Render JSON instead of the console format.

    Returns:
        Configured logger instance
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    # No-op when the host already attached handlers to the root logger
    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level)

    return structlog.stdlib.get_logger()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Binds ``component`` (last dotted segment) and ``module_path``.

    Returns:
        Logger instance with module context

    Example:
        # In gettext_commons/i18n/loader.py
        logger = get_module_logger()
        # context: {"component": "loader", "module_path": "gettext_commons.i18n.loader"}
    """
    base = structlog.get_logger()

    current_frame = inspect.currentframe()
    if current_frame is None:
        return base

    frame = current_frame.f_back
    if frame is None:
        return base

    module = inspect.getmodule(frame)
    if module:
        module_name = module.__name__
        parts = module_name.split(".")
        return base.bind(component=parts[-1], module_path=module_name)

    return base.bind(component="unknown")
