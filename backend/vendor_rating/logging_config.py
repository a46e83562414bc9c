"""
Structlog configuration for the vendor rating engine.

Outputs JSON-formatted structured logs to stdout (console renderer on a TTY).
Call configure() once at process startup.
"""
import logging
import sys

import structlog

from .dependencies import LOG_LEVEL

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("urllib3", "asyncio")


def configure(log_level: str | None = None) -> None:
    """Configure structlog for JSON structured logging.

    Args:
        log_level: Root level name. Defaults to the LOG_LEVEL env var.
    """
    log_level = log_level or LOG_LEVEL

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer()
            if sys.stderr.isatty()
            else structlog.processors.JSONRenderer(),
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
