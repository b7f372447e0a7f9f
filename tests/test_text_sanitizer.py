import pytest

from text_sanitizer import sanitize


def test_sanitize_resolves_entities():
    assert sanitize("Salt &amp; pepper") == "Salt & pepper"
    assert sanitize("325&#176;F") == "325°F"


def test_sanitize_strips_markup():
    assert sanitize("<p>Mix <strong>well</strong></p>") == "Mix well"
    assert sanitize("<p>Whisk.</p>\n") == "Whisk."


@pytest.mark.parametrize("text", [
    "2 cups flour",
    "  1 onion, diced  ",
    "Salt & pepper, to taste",
    "",
])
def test_sanitize_leaves_plain_text_unchanged(text):
    assert sanitize(text) == text


@pytest.mark.parametrize("text", [
    "2 cups flour",
    "Salt & pepper, to taste",
    "<p>Fish &amp; chips</p>",
    "<ul><li>One</li><li>Two</li></ul>",
])
def test_sanitize_is_idempotent(text):
    once = sanitize(text)
    assert sanitize(once) == once


@pytest.mark.parametrize("raw", [
    b"<p>caf\xe9</p>",
    b"\xff\xfe<b>bold",
    b"<div",
    b"&#",
    b"caf\xc3",
])
def test_sanitize_never_raises_on_bytes(raw):
    assert isinstance(sanitize(raw), str)


def test_sanitize_replaces_invalid_utf8():
    assert sanitize(b"<p>caf\xe9</p>") == "caf�"


@pytest.mark.parametrize("text, expected", [
    ("Fish &amp;amp; chips", "Fish & chips"),
    ("<p>2 &amp;lt; 3 cups</p>", "2 < 3 cups"),
    ("&lt;b&gt;Bold&lt;/b&gt; butter", "Bold butter"),
])
def test_sanitize_resolves_nested_escaping(text, expected):
    once = sanitize(text)
    assert once == expected
    assert sanitize(once) == once
