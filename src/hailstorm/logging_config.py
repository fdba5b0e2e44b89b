# hailstorm/logging_config.py
import logging
import sys
from typing import TextIO


def setup_logging(
    level: str = "WARNING", log_file: str | None = None, stream: TextIO | None = None
) -> logging.Logger:
    """
    Configure logging to print to stderr by default, keeping stdout for the report.
    If log_file is provided, also log to that file.
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")

    return logger
