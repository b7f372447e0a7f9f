import warnings
from typing import Union

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, ParserRejectedMarkup

# Scraped JSON-LD is sometimes escaped twice ("&amp;amp;").
MAX_UNESCAPE_PASSES = 4


def _looks_like_markup(text: str) -> bool:
    return "<" in text or "&" in text


def _strip_once(text: str) -> str:
    with warnings.catch_warnings():
        # Short strings such as "a.jpg & b" trip the filename heuristic.
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        try:
            soup = BeautifulSoup(text, "html.parser")
        except ParserRejectedMarkup:
            return text

    stripped = soup.get_text()
    if stripped == text:
        return text
    return stripped.strip()


def sanitize(raw: Union[str, bytes]) -> str:
    """Strip markup and resolve entities, returning human-readable text.

    Parsing repeats until the text stops changing, so nested escaping is
    fully resolved. Text the HTML parser leaves untouched, or rejects,
    comes back as-is.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    text = raw
    for _ in range(MAX_UNESCAPE_PASSES):
        if not _looks_like_markup(text):
            break
        stripped = _strip_once(text)
        if stripped == text:
            break
        text = stripped
    return text
