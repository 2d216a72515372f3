"""
Logging Configuration Module

Provides consistent logging setup for the knowledge base services.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

APP_LOGGER_NAME = "knowledge_base"
PIPELINE_PACKAGES = (
    "pdf_extractor",
    "chunking",
    "vector_store",
    "retrieval",
    "generation",
)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the knowledge base application.

    Attaches handlers to the application logger and to the loggers of the
    pipeline packages, so module loggers created with
    ``logging.getLogger(__name__)`` share the same output.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to log file
        format_string: Optional custom format string

    Returns:
        Configured application logger
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in (APP_LOGGER_NAME, *PIPELINE_PACKAGES):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    return logging.getLogger(APP_LOGGER_NAME)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the application logger.

    Args:
        name: Component name

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
