"""
Inline link notation.

Free-text fields may embed links written as ((URL label)). The label is
optional; without one, the URL's host and path stand in for it.

Examples:
    >>> parse_link("((https://example.com/x?q#f))").label
    'example.com/x'
    >>> parse_link("((https://example.com my site))").label
    'my site'
"""

import re
import string
from dataclasses import dataclass
from urllib.parse import SplitResult, unquote, urlsplit

from resify.contexts.templating.exceptions import MalformedURLError, NotALinkError

WHITESPACE = "\r\n\t "
LINK_OPEN = "(("
LINK_CLOSE = "))"

_WHITESPACE_RUN = re.compile(r"[\r\n\t ]+")
_SCHEME = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_PORT = re.compile(r"^:[0-9]*$")

# Characters allowed unescaped in a host (besides letters and digits)
_HOST_CHARS = set("-._~!$&'()*+,;=:[]<>\"")


@dataclass(frozen=True)
class Link:
    """
    A parsed ((URL label)) occurrence.

    Attributes:
        url: Parsed URL components
        label: Display text, never empty
        href: URL string as written in the notation
    """

    url: SplitResult
    label: str
    href: str

    def __str__(self) -> str:
        return self.href


def _check_escapes(text: str, what: str, host: bool = False) -> None:
    """Validate %XX escapes; a host may only escape "%" itself or non-ASCII bytes."""
    i = 0
    while i < len(text):
        if text[i] == "%":
            escape = text[i + 1 : i + 3]
            if len(escape) < 2 or not all(c in string.hexdigits for c in escape):
                raise MalformedURLError(text, f"invalid URL escape {text[i:i + 3]!r} in {what}")
            if host and int(escape, 16) < 0x80 and escape != "25":
                raise MalformedURLError(text, f"invalid URL escape {text[i:i + 3]!r} in host")
            i += 3
            continue
        i += 1


def _check_host(authority: str) -> None:
    host = authority.rpartition("@")[2]

    if host.startswith("["):
        end = host.find("]")
        if end < 0:
            raise MalformedURLError(authority, "missing ']' in host")
        port = host[end + 1 :]
        if port and not _PORT.match(port):
            raise MalformedURLError(authority, f"invalid port {port!r} after host")
        return

    name, colon, port = host.rpartition(":")
    if colon and not port.isdigit() and port != "":
        raise MalformedURLError(authority, f"invalid port {colon + port!r} after host")

    for char in host:
        if ord(char) < 0x80 and not char.isalnum() and char not in _HOST_CHARS and char != "%":
            raise MalformedURLError(authority, f"invalid character {char!r} in host name")
    _check_escapes(host, "host", host=True)


def parse_url(token: str) -> SplitResult:
    """
    Parse a URL token, rejecting syntax a strict URL parser would reject.

    Raises:
        MalformedURLError: If the token is not a syntactically valid URL reference
    """
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in token):
        raise MalformedURLError(token, "invalid control character in URL")

    rest, _, fragment = token.partition("#")
    _check_escapes(fragment, "fragment")

    if rest.startswith(":"):
        raise MalformedURLError(token, "missing protocol scheme")

    scheme = _SCHEME.match(rest)
    if scheme:
        rest = rest[scheme.end() :]
    else:
        segment = rest.split("/", 1)[0]
        if ":" in segment.split("?", 1)[0]:
            raise MalformedURLError(token, "first path segment in URL cannot contain colon")

    rest = rest.split("?", 1)[0]
    if rest.startswith("//"):
        authority, slash, path = rest[2:].partition("/")
        _check_host(authority)
        rest = slash + path
    _check_escapes(rest, "path")

    try:
        return urlsplit(token)
    except ValueError as e:
        raise MalformedURLError(token, str(e)) from e


def _host_and_path(url: SplitResult) -> str:
    # Opaque references (mailto:user@host) have neither
    if url.scheme and url.netloc == "" and not url.path.startswith("/"):
        return ""
    return url.netloc.rpartition("@")[2] + unquote(url.path)


def parse_link(text: str) -> Link:
    """
    Parse one ((URL label)) token into a Link.

    The interior is split on its first run of whitespace into the URL and an
    optional label. Without an explicit label, host + path is used, and
    failing that the URL as written.

    Args:
        text: The full token, delimiters included

    Returns:
        Parsed Link with a non-empty label

    Raises:
        NotALinkError: If text is not wrapped in (( and )) or is empty inside
        MalformedURLError: If the URL part cannot be parsed
    """
    if not text.startswith(LINK_OPEN) or not text.endswith(LINK_CLOSE) or len(text) <= 4:
        raise NotALinkError(text)

    interior = text[2:-2].strip(WHITESPACE)
    if not interior:
        raise NotALinkError(text)

    components = _WHITESPACE_RUN.split(interior, maxsplit=1)
    token = components[0]
    url = parse_url(token)

    label = components[1].strip(WHITESPACE) if len(components) > 1 else ""
    if not label:
        label = _host_and_path(url)
    if not label:
        label = token

    return Link(url=url, label=label, href=token)
