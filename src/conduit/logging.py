"""Logging configuration for Conduit.

Conduit logs through loguru. Records from stdlib loggers (uvicorn,
SQLAlchemy) are forwarded to loguru so one sink and one level apply to the
whole process.
"""

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Loggers of the server Conduit runs in. uvicorn.access is left out because
# the router's request logger already records every request.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "asyncio")
SQL_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _intercept(names: tuple[str, ...], level: str | int) -> None:
    for name in names:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [InterceptHandler()]
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(level)


def setup_logging(log_level: str, sql_log: bool = False) -> None:
    """Configure the loguru sink and forward stdlib loggers to it.

    Args:
        log_level: Level for Conduit and the server loggers
        sql_log: Forward SQLAlchemy engine and pool logging (emitted SQL) as well
    """
    log_level = log_level.upper()

    logger.remove()
    logger.add(sys.stderr, level=log_level, format=LOG_FORMAT, colorize=True)

    _intercept(SERVER_LOGGERS, log_level)
    logging.getLogger("uvicorn.access").disabled = True

    if sql_log:
        _intercept(SQL_LOGGERS, logging.INFO)

    logger.info(f"Log level set to: {log_level}{' (SQL logging enabled)' if sql_log else ''}")
