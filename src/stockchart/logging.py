"""Structured logging for chart builds, rendered by structlog over stdlib logging.

Chart code logs snake_case events with keyword context, e.g.
``logger.info("chart_saved", path=..., format=...)``. matplotlib and Pillow
emit their own stdlib records, which pass through the same formatter.
"""

import logging
import os

import structlog

LOG_FORMATS = ("console", "json")

#: Third-party loggers that flood DEBUG output while a figure is saved.
_NOISY_LOGGERS = ("matplotlib", "matplotlib.font_manager", "PIL")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(log_level: str = "INFO", log_format: str | None = None) -> None:
    """Configure structlog and route stdlib records through its formatter.

    Args:
        log_level: Root level name; unknown names fall back to INFO.
        log_format: "console" (human-readable) or "json". None reads the
            LOG_FORMAT environment variable, defaulting to console.

    Raises:
        ValueError: If ``log_format`` names neither renderer.
    """
    if log_format is None:
        log_format = os.environ.get("LOG_FORMAT", "console")
    log_format = log_format.lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {log_format!r}, expected one of {LOG_FORMATS}")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
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

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # matplotlib and Pillow stay at WARNING so DEBUG runs stay readable
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger with the given name."""
    return structlog.get_logger(name)
