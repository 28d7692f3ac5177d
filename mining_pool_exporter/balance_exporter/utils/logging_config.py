"""
Logging configuration for the balance exporter.
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime


def setup_logging(name=None, level=logging.INFO, log_dir=None):
    """
    Set up logging configuration.

    Args:
        name: Logger name (defaults to root logger if None)
        level: Logging level
        log_dir: Directory for a dated log file (console only if None)

    Returns:
        Configured logger
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        os.makedirs(log_dir, exist_ok=True)
        log_filename = f"{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_dir / log_filename)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger
