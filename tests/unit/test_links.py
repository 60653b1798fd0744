"""Unit tests for ((URL label)) link notation parsing."""

import pytest

from resify.contexts.templating.exceptions import MalformedURLError, NotALinkError
from resify.contexts.templating.links import parse_link


@pytest.mark.unit
@pytest.mark.parametrize(
    "text,label",
    [
        ("((http://url-to-thing.com/path?query#fragment))", "url-to-thing.com/path"),
        ("((http://url-to-thing.com/path?query#fragment label))", "label"),
        ("((http://url-to-thing.com/path?query#fragment multi-word label))", "multi-word label"),
        ("(( http://url-to-thing.com/path?query#fragment multi-word label ))", "multi-word label"),
        ("((not-a-useful-url multi-word label))", "multi-word label"),
        ("(())))", "))"),  # The most bizarre things are URLs.
        ("((f))", "f"),
        ("(( f:// ))", "f://"),
        ("((f://host))", "host"),
        ("((f://host {}))", "{}"),
        ("((f://host/%20 {}))", "{}"),
        ("((http://x.com/a%20b))", "x.com/a b"),  # Label path is decoded
        ("((http://x.com:8080/caf%C3%A9))", "x.com:8080/caf\u00e9"),
    ],
)
def test_parse_link_label(text, label):
    """Test label derivation for valid link notation."""
    assert parse_link(text).label == label


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "not a link",
        "(())",
        "((\t\n\r ))",
        "(* what are you doing this isn't applescript *)",
        "((",
        "))",
    ],
)
def test_parse_link_not_a_link(text):
    """Test that text without usable link notation is rejected as not a link."""
    with pytest.raises(NotALinkError):
        parse_link(text)


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "((f://host%20 {}))",  # ASCII escape in host
        "((http://example.com/%zz label))",  # Bad escape in path
        "((http://example.com/#%g1))",  # Bad escape in fragment
        "((:nothing))",  # Missing scheme
        "((http://example.com:port/))",  # Non-numeric port
        "((1a:b/c))",  # Colon in first path segment
    ],
)
def test_parse_link_malformed_url(text):
    """Test that broken URLs raise MalformedURLError, not NotALinkError."""
    with pytest.raises(MalformedURLError):
        parse_link(text)


@pytest.mark.unit
def test_malformed_url_is_distinct_from_not_a_link():
    """Test that the two failure kinds do not overlap."""
    assert not issubclass(MalformedURLError, NotALinkError)
    assert not issubclass(NotALinkError, MalformedURLError)


@pytest.mark.unit
def test_parse_link_with_label():
    """Test URL and label are both kept for an explicit label."""
    link = parse_link("((http://x.com label text))")

    assert link.label == "label text"
    assert link.href == "http://x.com"
    assert link.url.scheme == "http"
    assert link.url.netloc == "x.com"


@pytest.mark.unit
def test_parse_link_keeps_inner_label_whitespace():
    """Test that only surrounding whitespace is trimmed from the label."""
    link = parse_link("((http://x.com \t two   spaced  words \n))")
    assert link.label == "two   spaced  words"


@pytest.mark.unit
def test_parse_link_splits_on_any_whitespace():
    """Test that a tab also separates the URL from the label."""
    link = parse_link("((http://x.com\tlabel))")

    assert link.href == "http://x.com"
    assert link.label == "label"


@pytest.mark.unit
def test_parse_link_fallback_host_and_path():
    """Test that host (with port) and path make the default label."""
    link = parse_link("((https://user@example.com:8080/a/b?c=d#e))")
    assert link.label == "example.com:8080/a/b"


@pytest.mark.unit
def test_parse_link_fallback_full_url():
    """Test that URLs without host or path fall back to the URL itself."""
    assert parse_link("((mailto:me@example.com))").label == "mailto:me@example.com"
    assert parse_link("((?q=1))").label == "?q=1"


@pytest.mark.unit
def test_parse_link_structured_url():
    """Test that the parsed URL exposes its components."""
    link = parse_link("((http://example.com/x?q#f))")

    assert link.url.path == "/x"
    assert link.url.query == "q"
    assert link.url.fragment == "f"
    assert str(link) == "http://example.com/x?q#f"
