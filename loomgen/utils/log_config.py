import logging
from typing import Union

import colorlog

LOG_FORMAT = "%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    return numeric_level


def setup_logging(
    logger_name: str, level: Union[str, int] = "INFO", color: str = "white"
) -> logging.Logger:
    """
    Create (or reconfigure) a named logger with a single colored console handler.

    Args:
        logger_name (str): Name of the logger, shown in every record.
        level (str | int): Logging level name ("DEBUG", "INFO", ...) or number.
        color (str): colorlog color used for DEBUG and INFO records.

    Returns:
        logging.Logger: The configured logger.

    Raises:
        ValueError: If the level name is not a valid logging level.
    """
    numeric_level = _resolve_level(level)

    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)

    # Calling this twice for the same name must not duplicate output
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(numeric_level)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors={
                "DEBUG": color,
                "INFO": color,
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )
    logger.addHandler(handler)

    return logger
