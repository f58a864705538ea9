from __future__ import annotations

import logging
import sys

import structlog

_LOGGING_CONFIGURED = False


def setup_logging() -> structlog.BoundLogger:
    """Set up structured logging for the repopac package.

    Diagnostics (invalid paths, unreadable files) are written to stderr and
    never into the report itself.

    Returns:
        A structlog logger instance configured for the repopac package.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if not _LOGGING_CONFIGURED:
        logging.basicConfig(
            level=logging.INFO,
            handlers=[logging.StreamHandler(sys.stderr)],
            format="%(message)s",
        )
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_CONFIGURED = True

    return structlog.get_logger("repopac")


logger = setup_logging()
