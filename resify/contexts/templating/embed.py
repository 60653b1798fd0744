"""File embedding for templates, confined to the data directory."""

import posixpath
from pathlib import Path

from resify.contexts.templating.exceptions import EmbedEscapeError


def read_relative(root: Path, path: str) -> str:
    """
    Read a UTF-8 file beneath root.

    The path is normalized first, so "css/../style.css" is fine while
    "../secrets.txt" is not.

    Args:
        root: Data directory that embedded files must live under
        path: Path relative to root

    Returns:
        File contents

    Raises:
        EmbedEscapeError: If path is absolute or resolves outside root
        OSError: If the file cannot be read
    """
    cleaned = posixpath.normpath(path.replace("\\", "/"))
    if posixpath.isabs(cleaned) or cleaned == ".." or cleaned.startswith("../"):
        raise EmbedEscapeError(path, root)

    root = Path(root).resolve()
    target = (root / cleaned).resolve()

    # Symlinks may still point elsewhere
    if not target.is_relative_to(root):
        raise EmbedEscapeError(path, root)

    return target.read_text(encoding="utf-8")
