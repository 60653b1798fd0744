"""
Shared utilities for resify.

Common functionality used across contexts:
- Logger configuration with provenance tracking
"""

from resify.utils.logger import log_provenance, provenance_lines, setup_logger

__all__ = ["log_provenance", "provenance_lines", "setup_logger"]
