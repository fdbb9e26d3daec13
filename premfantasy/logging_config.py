"""Logging setup for the premfantasy package and its CLI."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = 'premfantasy'

FILE_FORMAT = '%(asctime)s %(levelname)-7s %(name)s [%(filename)s:%(lineno)d] %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'


def _file_handler(log_dir: Path, level: int) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f'premfantasy_{datetime.now():%Y%m%d_%H%M%S}.log'
    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the ``premfantasy`` logger.

    Module loggers (``premfantasy.roster``, ``premfantasy.ledger``...) inherit
    these handlers. Calling this again replaces the previous handlers.

    Args:
        log_dir: Where timestamped log files go (default: ./logs)
        level: Threshold for the logger and every handler
        log_to_file: Write a detailed log file
        log_to_console: Echo short messages to stdout

    Returns:
        The package logger

    Example:
        from premfantasy.logging_config import setup_logging
        logger = setup_logging(log_to_file=False)
        logger.info("Scoring GW12")
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers = []

    if log_to_file:
        logger.addHandler(_file_handler(Path(log_dir or 'logs'), level))

    if log_to_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Package logger, or the child ``premfantasy.<name>``."""
    return logging.getLogger(f'{PACKAGE_LOGGER}.{name}' if name else PACKAGE_LOGGER)
