"""
Application logging setup
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from config.settings import Settings, get_settings


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Route stdlib logging records (uvicorn, httpx, ...) into loguru"""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _file_sinks(settings: Settings) -> List[Path]:
    log_dir = Path(settings.log_dir)
    sinks = []

    if settings.log_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        path = log_dir / settings.log_file
        logger.add(
            path,
            format=LOG_FORMAT,
            level=settings.log_level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="zip",
            encoding="utf-8",
        )
        sinks.append(path)

    if settings.error_log_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        path = log_dir / settings.error_log_file
        logger.add(
            path,
            format=LOG_FORMAT,
            level="ERROR",
            rotation="1 week",
            retention="4 weeks",
            encoding="utf-8",
        )
        sinks.append(path)

    return sinks


def setup_logging(settings: Optional[Settings] = None) -> List[Path]:
    """Configure loguru sinks from settings; returns the log files in use"""
    settings = settings or get_settings()

    logger.remove()
    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=settings.log_level,
        colorize=settings.log_colorize,
    )

    sinks = _file_sinks(settings)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for logger_name in settings.log_intercept:
        logging.getLogger(logger_name).handlers = [InterceptHandler()]

    logger.debug(f"Logging configured: level={settings.log_level}, files={[str(p) for p in sinks]}")
    return sinks
