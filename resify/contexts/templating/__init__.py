"""
Templating Context

Responsibilities:
- Loads and executes user templates from the data directory
- Escapes output for the selected output mode (HTML or text)
- Parses ((URL label)) link notation and substitutes rendered links
- Embeds files from the data directory into templates

Owns: Template execution, escaping, link notation
Never: Reads or writes resume records
"""

from resify.contexts.templating.exceptions import (
    EmbedEscapeError,
    LinkRenderError,
    MalformedURLError,
    NotALinkError,
    TemplateRenderError,
)
from resify.contexts.templating.linkify import linkify, placeholder_for, render_link
from resify.contexts.templating.links import Link, parse_link
from resify.contexts.templating.template_registry import (
    OutputMode,
    TemplateExecutor,
    TemplateRegistry,
)

__all__ = [
    # Link notation
    "Link",
    "parse_link",
    "render_link",
    "linkify",
    "placeholder_for",
    # Template execution
    "OutputMode",
    "TemplateExecutor",
    "TemplateRegistry",
    # Errors
    "NotALinkError",
    "MalformedURLError",
    "LinkRenderError",
    "TemplateRenderError",
    "EmbedEscapeError",
]
