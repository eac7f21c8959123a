"""Logging setup for the ``partydraft`` logger tree."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER = 'partydraft'


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the ``partydraft`` logger.

    Engine, I/O and CLI loggers all propagate here. Calling this again replaces
    the handlers instead of adding a second set.

    Args:
        log_dir: Where draft logs go (default: ./logs)
        level: Level for the logger and its handlers
        log_to_file: Write ``draft_<timestamp>.log`` with file:line detail
        log_to_console: Echo ``LEVEL: message`` lines to stdout
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = []

    if log_to_file:
        log_dir = log_dir or Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(
            log_dir / f'draft_{datetime.now():%Y%m%d_%H%M%S}.log', encoding='utf-8'
        )
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(name)s %(levelname)s [%(filename)s:%(lineno)d] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        handler.setLevel(level)
        logger.addHandler(handler)

    if log_to_console:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        handler.setLevel(level)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger under ``partydraft`` (``'cli'`` becomes ``'partydraft.cli'``)."""
    if name != ROOT_LOGGER and not name.startswith(f'{ROOT_LOGGER}.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)
