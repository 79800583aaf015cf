"""
logging_config.py — Loguru setup for the storefront service

Loguru is the only log backend. Library modules (vendor client, scheduler,
stores, services) keep using logging.getLogger(__name__); the intercept
handler forwards those records into Loguru so sync runs, vendor calls and
HTTP requests end up in one stream.

Business Rules:
- APP_ENV=production → JSON lines on stdout plus a rotating file under
  LOG_DIR (50 MB files, 7-day retention, gzip)
- Anything else → colored single-line console output
- LOG_LEVEL (or the level argument) sets the minimum level for every sink
- Every record carries extra["service"] = "storefront"

Called by: storefront/main.py (lifespan startup)
Depends on: LOG_LEVEL, APP_ENV, LOG_DIR environment variables
"""

import logging
import os
import sys

from loguru import logger

SERVICE_NAME = "storefront"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine", "apscheduler")


def is_production() -> bool:
    return os.getenv("APP_ENV", "").lower() == "production"


def _add_production_sinks(level: str) -> None:
    logger.add(sys.stdout, level=level, format="{message}", serialize=True)
    logger.add(
        os.path.join(os.getenv("LOG_DIR", "/var/log/storefront"), "storefront.log"),
        level=level,
        rotation="50 MB",
        retention="7 days",
        compression="gz",
        serialize=True,
    )


def _add_console_sink(level: str) -> None:
    logger.add(sys.stdout, level=level, format=CONSOLE_FORMAT, colorize=True)


def setup_logging(level: str | None = None) -> None:
    """Replace Loguru's default sink and route stdlib logging through it.

    Safe to call more than once; each call starts from a clean handler list.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    production = is_production()

    logger.remove()
    logger.configure(extra={"service": SERVICE_NAME})
    if production:
        _add_production_sinks(level)
    else:
        _add_console_sink(level)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging configured (level={}, production={})", level, production)


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to Loguru, keeping the original caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())
