"""
Link substitution for free-text fields.

linkify() replaces every ((URL label)) occurrence in a string with the output
of the "link" template while escaping the surrounding prose for the output
context. Rendered links are swapped out for placeholders before escaping and
swapped back in afterwards, so link markup is never escaped twice.
"""

import hashlib
import re
from typing import Callable, Dict

from resify.contexts.templating.exceptions import (
    LinkRenderError,
    MalformedURLError,
    NotALinkError,
)
from resify.contexts.templating.links import Link, parse_link
from resify.contexts.templating.logger import _log_debug, log_link_failure

LINK_TEMPLATE = "link"

# Shortest run up to the next "))"; links never span lines
LINK_PATTERN = re.compile(r"\(\(.+?\)\)")

# Placeholders are "$" + hex digest + "$", which no HTML escaper alters
PLACEHOLDER_DELIMITER = "$"


def placeholder_for(raw: str) -> str:
    """Return the placeholder token standing in for a raw link occurrence."""
    digest = hashlib.sha1(raw.encode("utf-8")).hexdigest()
    return f"{PLACEHOLDER_DELIMITER}{digest}{PLACEHOLDER_DELIMITER}"


def link_context(link: Link) -> Dict[str, object]:
    """Template context for the "link" template."""
    return {"link": link, "url": link.href, "label": link.label}


def render_link(link: Link, executor) -> str:
    """
    Render a parsed link through the "link" template.

    The executor's output is returned unchanged: the executor escapes for its
    own output context.

    Args:
        link: Parsed link
        executor: Object with execute_named_template(name, data) -> str

    Returns:
        Rendered link text

    Raises:
        LinkRenderError: If the template is missing or fails; its fallback is the label
    """
    try:
        return executor.execute_named_template(LINK_TEMPLATE, link_context(link))
    except Exception as e:
        log_link_failure(link.href, e)
        raise LinkRenderError(fallback=link.label, original_error=e) from e


def linkify(text: str, executor, escape: Callable[[str], str]) -> str:
    """
    Replace ((URL label)) links in text with rendered links and escape the rest.

    Each distinct link text is parsed and rendered once, however often it
    occurs. Link text that fails to parse is treated as prose. Link text that
    fails to render is replaced by its label, escaped as prose.

    Args:
        text: Free text possibly containing link notation
        executor: Object with execute_named_template(name, data) -> str
        escape: Escape function for the output context (identity for text output)

    Returns:
        Escaped text with rendered links in place

    Example:
        >>> linkify("see ((https://x.com docs))", registry, registry.escape)
        'see <a href="https://x.com">docs</a>'
    """
    # Placeholders whose replacement is already markup, and those that are still prose
    rendered: Dict[str, str] = {}
    prose: Dict[str, str] = {}

    def substitute(match: "re.Match[str]") -> str:
        raw = match.group(0)
        token = placeholder_for(raw)
        if token in rendered or token in prose:
            return token

        try:
            link = parse_link(raw)
        except NotALinkError:
            prose[token] = raw
            return token
        except MalformedURLError as e:
            log_link_failure(raw, e)
            prose[token] = raw
            return token

        try:
            rendered[token] = render_link(link, executor)
        except LinkRenderError as e:
            prose[token] = e.fallback
        return token

    intermediate = LINK_PATTERN.sub(substitute, text)
    if not rendered and not prose:
        return escape(text)

    _log_debug(f"Linkified {len(rendered)} link(s), {len(prose)} fell back to text")

    result = escape(intermediate)
    for token, replacement in prose.items():
        result = result.replace(token, escape(replacement))
    for token, replacement in rendered.items():
        result = result.replace(token, replacement)
    return result
