"""Structured logging setup."""

import logging

import structlog


def configure_logging(settings) -> None:
    """Configure structlog on top of stdlib logging from settings."""
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
