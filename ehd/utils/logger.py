"""
Logging utilities
"""

import logging
from pathlib import Path
from datetime import datetime


def setup_logger(name: str = 'ehd',
                log_file: Path = None,
                level: int = logging.INFO) -> logging.Logger:
    """
    Setup logger with console and optional file handlers

    Library modules log under the ``ehd`` namespace, so configuring the
    ``ehd`` logger also captures their (debug) messages.

    Args:
        name: Logger name
        log_file: Optional path to log file
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers = []

    # Create formatters
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_timestamp() -> str:
    """Get current timestamp string, e.g. for default output file names"""
    return datetime.now().strftime('%Y%m%d_%H%M%S')
