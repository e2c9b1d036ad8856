"""
Logging utilities with Rich integration.

This module provides logging setup and utilities for console output.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(
    name: str = "streamtune",
    level: str = "INFO",
    log_file: Optional[Path] = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the package logger: Rich console output plus an optional log file.

    Args:
        name: Logger name (use "streamtune" to match package name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        verbose: Enable verbose output with file paths
        console: Rich console to use (creates a stderr console if None)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # setup_logger may run once per CLI invocation
    logger.handlers.clear()

    # Console goes to stderr so command output on stdout stays clean
    rich_console = console or Console(stderr=True)
    rich_handler = RichHandler(
        console=rich_console,
        rich_tracebacks=True,
        markup=True,
        show_time=True,
        show_path=verbose,
        omit_repeated_times=False,
        level=log_level,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


# Quiet until the CLI configures verbosity
default_logger = setup_logger(level="WARNING")


def get_logger(name: str = "streamtune") -> logging.Logger:
    """
    Get a logger instance.

    Modules call get_logger(__name__); names like "streamtune.presets.optimizer"
    inherit handlers and level from the "streamtune" logger configured by
    setup_logger().

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        Logger instance that inherits from the package logger
    """
    return logging.getLogger(name)
