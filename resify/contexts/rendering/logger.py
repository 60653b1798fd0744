"""
Rendering context logger.

Owns sink setup for a render run: console on stderr (stdout carries the
rendered document) plus an optional render.log under the log directory.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from resify.utils.logger import setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Optional[Path], mode: str, template: str) -> Optional[Path]:
    """
    Configure logging for a render run.

    Args:
        log_dir: Directory for render.log (None for console only)
        mode: Output mode, recorded in the provenance header
        template: Main template name, recorded in the provenance header

    Returns:
        Path to render.log, or None
    """
    return setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Output mode": mode, "Main template": template},
    )


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_start(source: str, template: str) -> None:
    _log_debug(f"Rendering {'<stdin>' if source == '-' else source} through {template}")


def log_render_result(result, elapsed_time: float) -> None:
    """Summarize a render run (RenderResult) at SUCCESS or ERROR level."""
    count = len(result.rendered)
    if result.success:
        _log_success(f"Rendered {count} record(s) in {elapsed_time:.2f}s")
        return

    _log_error(f"Stopped after {count} record(s) in {elapsed_time:.2f}s")
    for error in result.errors:
        _log_error(f"  {error}")
