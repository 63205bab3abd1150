"""Logging configuration for the application"""
import logging
import sys
from pathlib import Path
from typing import Optional
from projectboard.config import settings, BASE_DIR

logs_dir = BASE_DIR / "logs"


def setup_logging(
    name: str = "projectboard",
    log_level: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration

    Args:
        name: Logger name (usually __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name, written under ``logs/``

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL
    if log_file is None:
        log_file = settings.LOG_FILE

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    detailed_formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        fmt='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    if log_file:
        logs_dir.mkdir(exist_ok=True)
        file_handler = logging.FileHandler(logs_dir / Path(log_file).name, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``projectboard`` hierarchy.

    Child loggers propagate to the root ``projectboard`` logger, which is
    configured once by :func:`setup_logging`.
    """
    root = setup_logging()
    if not name or name == root.name:
        return root
    if not name.startswith(root.name + "."):
        name = f"{root.name}.{name}"
    return logging.getLogger(name)
