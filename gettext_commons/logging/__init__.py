"""Structured logging for gettext-commons.

Public API:
    - configure_logging(): Opt-in structlog setup for applications without one
    - get_module_logger(): Get a logger for the calling module

Example:
    from gettext_commons.logging import configure_logging, get_module_logger

    # At application startup
    configure_logging()

    # In a module
    logger = get_module_logger()
    logger.info("module_initialized")
"""

from gettext_commons.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
]
