"""
Shared loguru setup.

One console sink on stderr at INFO, and optionally a DEBUG file sink that
opens with a provenance header describing the run. Contexts wrap this in
their own logger module.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: Optional[Dict[str, object]] = None,
) -> Optional[Path]:
    """
    Replace all loguru sinks with the console sink and, if log_dir is set, a file sink.

    Args:
        context_name: Names the log file ({context_name}.log)
        log_dir: Directory for the file log (None for console only)
        extra_provenance: Extra header entries for the file log

    Returns:
        Path to the log file, or None

    Example:
        log_file = setup_logger("render", Path("outs/logs"), {"Output mode": "text"})
    """
    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    if log_dir is None:
        return None

    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")

    log_provenance(extra_provenance)
    return log_file


def provenance_lines(extra_context: Optional[Dict[str, object]] = None) -> List[str]:
    """Describe the current process: script, command line, working directory and Python version."""
    lines = [
        f"Script: {sys.argv[0]}",
        f"Command: {' '.join(sys.argv)}",
        f"Working directory: {Path.cwd()}",
        f"Python: {sys.version.split()[0]}",
    ]
    lines.extend(f"{key}: {value}" for key, value in (extra_context or {}).items())
    return lines


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """Write the provenance header at DEBUG, so only the file log carries it."""
    rule = "=" * 80
    logger.debug(rule)
    for line in provenance_lines(extra_context):
        logger.debug(line)
    logger.debug(rule)
