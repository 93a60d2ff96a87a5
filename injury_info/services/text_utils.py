"""
Text helpers shared by provider mappers and the aggregation layer:
slugs, cell-list parsing, HTML stripping, truncation.
"""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_LIST_SEPARATORS = re.compile(r"[,;|]")
_HTML_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


def create_slug(text: str) -> str:
    """
    Lowercase, collapse every run of non-alphanumerics to one hyphen, trim hyphens.

    "3M Combat Arms Earplugs!" -> "3m-combat-arms-earplugs"
    """
    if not text:
        return ""
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


def parse_list(text: str | None) -> list[str]:
    """Split a spreadsheet cell on , ; or | into trimmed, non-empty items."""
    if not text:
        return []
    return [item.strip() for item in _LIST_SEPARATORS.split(text) if item.strip()]


def clean_html(html: str | None) -> str:
    """Remove tags and normalize whitespace."""
    if not html:
        return ""
    return _WHITESPACE.sub(" ", _HTML_TAG.sub("", html)).strip()


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit]
