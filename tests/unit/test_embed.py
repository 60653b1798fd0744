"""Unit tests for embedding files from the data directory."""

import pytest

from resify.contexts.templating.embed import read_relative
from resify.contexts.templating.exceptions import EmbedEscapeError


@pytest.mark.unit
def test_read_relative(tmp_path):
    """Test reading files beneath the root, including normalized paths."""
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "site.css").write_text("body {}", encoding="utf-8")

    assert read_relative(tmp_path, "css/site.css") == "body {}"
    assert read_relative(tmp_path, "css/../css/site.css") == "body {}"


@pytest.mark.unit
@pytest.mark.parametrize("path", ["..", "../secret.txt", "css/../../secret.txt", "/etc/passwd"])
def test_read_relative_rejects_escape(tmp_path, path):
    """Test that paths leaving the root are rejected."""
    root = tmp_path / "data"
    root.mkdir()

    with pytest.raises(EmbedEscapeError):
        read_relative(root, path)


@pytest.mark.unit
def test_read_relative_rejects_symlink_escape(tmp_path):
    """Test that a symlink pointing outside the root is rejected."""
    root = tmp_path / "data"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")
    (root / "link.txt").symlink_to(tmp_path / "secret.txt")

    with pytest.raises(EmbedEscapeError):
        read_relative(root, "link.txt")


@pytest.mark.unit
def test_read_relative_missing_file(tmp_path):
    """Test that a missing file surfaces as an OS error."""
    with pytest.raises(FileNotFoundError):
        read_relative(tmp_path, "missing.txt")
