import logging
from typing import Optional

import structlog

from app.core.config import settings

# Libraries whose INFO output drowns out request logs
_NOISY_LOGGERS = ("sqlalchemy.pool", "sqlalchemy.dialects", "aiosqlite")


def _renderer(json_logs: bool):
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(level: Optional[str] = None, json_logs: Optional[bool] = None):
    """
    Configure structlog on top of the stdlib root logger and return a logger.

    Local and test runs get single-line console output. Every other
    environment emits one JSON object per line for log shippers. Request-scoped
    values bound with ``structlog.contextvars`` (the request id, method and
    path) are merged into every event.
    """
    level_name = (level or settings.log_level).upper()
    if json_logs is None:
        json_logs = settings.environment not in ("local", "test")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(json_logs),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        # structlog already rendered the line
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
    root_logger.setLevel(level_name)
    logging.getLogger("uvicorn").setLevel(level_name)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger()
