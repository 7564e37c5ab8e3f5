"""Loguru sink setup. Tracebacks are logged without variable values so secrets never reach the logs."""
import os
import sys
from typing import Any

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(sink: Any = None) -> None:
    level = os.getenv("MADE_LOG_LEVEL", "INFO").upper()
    logger.remove()
    logger.add(
        sink if sink is not None else sys.stderr,
        level=level,
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
    )
