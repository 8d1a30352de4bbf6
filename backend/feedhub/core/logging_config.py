"""
Logging setup for the API process.

- stdlib logging at INFO for application modules and uvicorn.
- structlog bound to stdlib so service events ("post.created", ...) share the
  same handlers and level.
- A dedicated ``feedhub.access`` logger appends one combined-format line per
  HTTP request to ``ACCESS_LOG_PATH``. It does not propagate to the root logger.
"""

import logging
from pathlib import Path
from typing import Optional

import structlog

ACCESS_LOGGER_NAME = "feedhub.access"


def configure_logging(log_level: str = "INFO", access_log_path: Optional[str] = None) -> None:
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(log_level)),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if access_log_path:
        configure_access_log(access_log_path)


def configure_access_log(path: str) -> logging.Logger:
    """Attaches an append-mode file handler to the access logger (idempotent per path)."""
    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
    access_logger.setLevel(logging.INFO)
    access_logger.propagate = False

    target = str(Path(path).resolve())
    for handler in access_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return access_logger

    Path(target).parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(target, mode="a", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    access_logger.addHandler(file_handler)
    return access_logger
