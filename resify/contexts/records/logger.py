"""
Records context logger.

Messages from loading and converting resume records carry a [records] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[records]"


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")
