"""String normalisation: slug generation and plain-text descriptions."""

import re

from bs4 import BeautifulSoup

# Any run of characters outside ASCII letters and digits becomes one separator.
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")


def slugify(text: str, lowercase: bool = True) -> str:
    """Turn *text* into a URL-safe slug.

    Runs of whitespace and punctuation collapse into a single hyphen, and
    leading/trailing hyphens are trimmed::

        slugify("9 ways to write better Code")  -> "9-ways-to-write-better-code"
        slugify("   JavaScript -- ")            -> "javascript"
        slugify("JavaScript tutorial", False)   -> "JavaScript-tutorial"

    ``lowercase=False`` keeps the original case and is meant for display
    only. Routing keys are always built with the default.
    """
    if not text:
        return ""
    if lowercase:
        text = text.lower()
    return _NON_ALNUM_RE.sub("-", text).strip("-")


def strip_html(text: str) -> str:
    """Return *text* with markup removed and whitespace collapsed."""
    if not text:
        return ""
    if "<" in text:
        text = BeautifulSoup(text, "lxml").get_text(separator=" ")
    return _WHITESPACE_RE.sub(" ", text).strip()
