import os
import sys
from loguru import logger

log_format = "{time:YYYY-MM-DDTHH:mm:ss.fff} | {level: ^7} | {file: ^20} | {function: ^20} | {line: >3} | {message}"
default_level = "INFO"


def configure(level=None) -> str:
    # stdout carries the output rows, logs go to stderr
    level = (level or os.environ.get("TWAP_LOG_LEVEL") or default_level).upper()
    try:
        logger.level(level)
    except ValueError:
        unknown, level = level, default_level
    else:
        unknown = None

    logger.remove()
    logger.add(
            sys.stderr,
            format=log_format,
            level=level,
            colorize=True,
        )
    if unknown is not None:
        logger.warning("Unknown log level {!r}, using {}", unknown, level)
    return level


configure()
logger = logger.opt(colors=True)
