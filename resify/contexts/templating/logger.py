"""
Templating context logger.

Template loading and link substitution log through here with a [template]
prefix. Sinks are configured once per run by the caller (see
resify.contexts.rendering.logger.setup_rendering_logger).
"""

from pathlib import Path
from typing import List

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_link_failure(raw: str, error: Exception) -> None:
    """Log a link that could not be parsed or rendered (its label or raw text is used instead)."""
    _log_warning(f"Cannot render link {raw!r}: {error}")


def log_template_loaded(data_dir: Path, names: List[str]) -> None:
    _log_debug(f"Loaded {len(names)} template(s) from {data_dir}: {', '.join(names) or '(none)'}")
