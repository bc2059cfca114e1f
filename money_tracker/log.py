"""
Structured Logging

Ledger mutations and store failures are logged as structured events
(entry_created, store_load_failed, ...) rather than free text, so a
session can be reconstructed from the log alone.

Logging is configured once at import. Loggers are stdlib-backed, so the
level is controlled with configure_logging().
"""

import logging

import structlog


structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(debug: bool = False) -> None:
    """
    Route log output to stderr at INFO (or DEBUG when debug is set).

    Call this from the application entry point, not from library code.
    """
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger named after the calling module."""
    return structlog.get_logger(name)
