"""
Core logging module.

Loguru is the only log pipeline: stdlib loggers (uvicorn, SQLAlchemy and
the service modules) are funnelled into it through InterceptHandler.
"""

import logging
import os
import sys

from loguru import logger

from app.core.config import settings

REQUEST_LEVEL = "REQUEST"

# Loggers that install their own handlers and must be rerouted explicitly
THIRD_PARTY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "fastapi")


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru, keeping the original caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real call site
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _register_request_level() -> None:
    try:
        logger.level(REQUEST_LEVEL)
    except ValueError:
        logger.level(REQUEST_LEVEL, no=25, color="<green>")


def _add_sinks() -> None:
    level = settings.LOG_LEVEL.upper()

    if settings.DEBUG:
        logger.add(sys.stderr, level=level, format=settings.LOG_FORMAT, backtrace=True, diagnose=True)

    file_options = {
        "level": level,
        "rotation": settings.LOG_ROTATION,
        "retention": settings.LOG_RETENTION,
        "compression": "gz",
    }
    if settings.LOG_JSON:
        file_options["serialize"] = True
    else:
        file_options["format"] = settings.LOG_FORMAT

    logger.add(os.path.join(settings.LOG_DIR, settings.LOG_FILENAME), **file_options)


def _intercept_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in logging.root.manager.loggerDict:
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).handlers = [InterceptHandler()]
        logging.getLogger(name).propagate = False


def setup_logging():
    """
    Configure loguru sinks and route stdlib logging into them.

    Safe to call more than once; each call replaces the previous sinks.
    """
    os.makedirs(settings.LOG_DIR, exist_ok=True)

    logger.remove()
    # Records logged outside a request still render the request_id field
    logger.configure(extra={"request_id": "-"})

    _register_request_level()
    _add_sinks()
    _intercept_stdlib_logging()

    return logger
