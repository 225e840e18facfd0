"""
Logging setup for embedding applications.

The library itself only calls `loguru.logger`; sinks are installed by the
application through configure_logging().

Environment Variables:
    LOG_LEVEL: Console verbosity (default: INFO)
        - DEBUG: every translated agent event and unpacked sub-run
        - INFO: run start/finish and agent-as-tool unpacking
        - WARNING: protocol violations, depth guard hits, config fallbacks
        - ERROR: agent failures and run timeouts
"""

import os
import sys
from pathlib import Path

from loguru import logger


VALID_LOG_LEVELS: set[str] = {"DEBUG", "INFO", "WARNING", "ERROR"}

DEFAULT_LOG_LEVEL = "INFO"

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - {message}"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def get_log_level() -> str:
    """LOG_LEVEL, upper-cased; INFO when unset or not one of VALID_LOG_LEVELS."""
    level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    return level if level in VALID_LOG_LEVELS else DEFAULT_LOG_LEVEL


def configure_logging(level: str | None = None, log_file: str | Path | None = None) -> None:
    """
    Replace loguru's default handler.

    Args:
        level: Console level; LOG_LEVEL (or INFO) is used when omitted or invalid
        log_file: Optional file that receives everything at DEBUG, rotated at 100 MB
    """
    if level is not None and level.upper() in VALID_LOG_LEVELS:
        console_level = level.upper()
    else:
        console_level = get_log_level()

    logger.remove()
    logger.add(sys.stderr, level=console_level, format=_CONSOLE_FORMAT, colorize=True)

    if log_file is not None:
        logger.add(
            log_file,
            level="DEBUG",
            format=_FILE_FORMAT,
            rotation="100 MB",
            retention="7 days",
        )

    logger.debug(f"[LOGGING] console={console_level} file={log_file or '-'}")
