"""Utility functions for arc-updater."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level}</level>: {message}"


def setup_logging(
    log_file: Optional[Path] = None,
    console_level: str = "WARNING",
    log_level: str = "DEBUG",
) -> None:
    """
    Configure loguru sinks for the CLI.

    Warnings and errors go to stderr so they stay visible next to the command
    output. Everything down to ``log_level`` goes to ``log_file`` when given.

    Args:
        log_file: Optional path of a rotating log file
        console_level: Minimum level written to stderr
        log_level: Minimum level written to the log file
    """
    logger.remove()
    # look up sys.stderr on every write so redirected streams are honoured
    logger.add(
        lambda message: sys.stderr.write(message),
        level=console_level,
        format=CONSOLE_FORMAT,
    )

    if log_file is None:
        return

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Could not create log directory {log_file.parent}: {e}")
        return

    logger.add(
        str(log_file),
        level=log_level,
        rotation="1 MB",
        retention=3,
        backtrace=False,
        diagnose=False,
    )
