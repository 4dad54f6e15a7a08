"""
Logging setup for the demo run: plain messages on stdout, and a rotating file
with timestamps and the thread name, since delayed session callbacks are
delivered from timer threads.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from . import settings

CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s [%(threadName)s] %(name)s %(levelname)s: %(message)s"

# Marks the handlers this module installs, so a second setup call is a no-op
# while handlers added by others (pytest's caplog, an embedding app) are ignored.
_HANDLER_TAG = "_inventory_ledger_handler"


def resolve_log_level(level: Union[str, int, None]) -> int:
    """Accepts a level number or name ("debug", "WARNING"); unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level or "").upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _tagged(handler: logging.Handler, fmt: str, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logger(
    name: Optional[str] = None,
    log_level: Union[str, int, None] = None,
    log_dir: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Configures `name` (the root logger by default) at `log_level`, or at
    LOG_LEVEL from the environment.

    Log files go to `log_dir` / LOG_FILENAME (LOG_DIR by default), rotated at
    LOG_MAX_BYTES with LOG_BACKUP_COUNT backups. Calling it again only updates
    the level.
    """
    level = resolve_log_level(settings.LOG_LEVEL if log_level is None else log_level)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    own = [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]
    if own:
        for handler in own:
            handler.setLevel(level)
        return logger

    if console:
        logger.addHandler(_tagged(logging.StreamHandler(sys.stdout), CONSOLE_FORMAT, level))

    log_dir = Path(log_dir or settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / settings.LOG_FILENAME,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    logger.addHandler(_tagged(file_handler, FILE_FORMAT, level))

    return logger
