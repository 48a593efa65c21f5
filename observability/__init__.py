"""ESP toolchain check observability.

Provides the dual-format logger and the report formatter.

Example:
    from observability import get_logger

    logger = get_logger("esp_toolcheck", console_level=logging.DEBUG)
    logger.debug("Auth header added")
"""

import logging
from functools import cache
from pathlib import Path

LOGGER_NAME = "esp_toolcheck"


@cache
def get_logger(
    name: str = LOGGER_NAME,
    log_dir: Path | None = None,
    console_enabled: bool = True,
    console_level: int = logging.INFO,
) -> "ToolcheckLogger":
    """Get or create logger instance.

    The same parameters always return the same instance.

    Args:
        name: Logger name.
        log_dir: Directory for log files. None disables file logging.
        console_enabled: Enable colored console output.
        console_level: Minimum level printed on the console.

    Returns:
        ToolcheckLogger instance.
    """
    from .logger import ToolcheckLogger

    return ToolcheckLogger(
        name=name,
        log_dir=log_dir,
        console_enabled=console_enabled,
        console_level=console_level,
    )


def reset() -> None:
    """Reset all singleton instances.

    Used primarily for testing to ensure clean state.
    """
    get_logger.cache_clear()


__all__ = [
    "LOGGER_NAME",
    "get_logger",
    "reset",
]
