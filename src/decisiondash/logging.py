import logging
from typing import Any

import structlog


def configure_logging(level: int | str | None = None, json_output: bool = True) -> None:
    """Configure structlog/standard logging bridge.

    ``level`` defaults to the ``log_level`` setting. Pass ``json_output=False``
    for human-readable console lines (used by the CLI ``--verbose`` flag).
    """
    if level is None:
        from decisiondash.config import get_settings

        level = get_settings().log_level.upper()

    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=level, format="%(message)s")
