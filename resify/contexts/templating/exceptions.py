"""Custom exceptions for templating context."""

from pathlib import Path
from typing import Optional


class NotALinkError(ValueError):
    """Raised when text is not wrapped in ((...)) link notation."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"not a link: {text!r}")


class MalformedURLError(ValueError):
    """
    Raised when link notation is well formed but its URL cannot be parsed.

    Attributes:
        url: The URL token that failed to parse
        reason: Why parsing failed
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"cannot parse URL {url!r}: {reason}")


class TemplateRenderError(Exception):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if template_name:
            parts.append(f"Template: {template_name}")

        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))


class LinkRenderError(TemplateRenderError):
    """
    Raised when the "link" template fails for a syntactically valid link.

    Attributes:
        fallback: Text to use in place of the rendered link (the link label)
    """

    def __init__(self, fallback: str, original_error: Optional[Exception] = None):
        self.fallback = fallback
        super().__init__(
            "Cannot render link", template_name="link", original_error=original_error
        )


class EmbedEscapeError(PermissionError):
    """Raised when an embedded file path resolves outside the data directory."""

    def __init__(self, path: str, root: Path):
        self.path = path
        self.root = root
        super().__init__(f"attempt to leave data directory via embed: {path!r} (root: {root})")
