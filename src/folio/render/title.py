"""Document title extraction for default output filenames."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

DEFAULT_TITLE = "document"
MAX_FILENAME_CHARS = 100

# Priority order; the first selector yielding non-empty text wins.
TITLE_SELECTORS = (
    "h1",
    "title",
    '[class*="title"]',
    "h2",
    "article h1, article h2",
)

_ILLEGAL_CHARS_RE = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHEN_RUN_RE = re.compile(r"-+")
_EDGE_HYPHEN_RE = re.compile(r"^-|-$")


def sanitize_filename(name: str) -> str:
    cleaned = _ILLEGAL_CHARS_RE.sub("", name)
    cleaned = _WHITESPACE_RE.sub("-", cleaned)
    cleaned = _HYPHEN_RUN_RE.sub("-", cleaned)
    cleaned = _EDGE_HYPHEN_RE.sub("", cleaned)
    return cleaned[:MAX_FILENAME_CHARS].lower() or DEFAULT_TITLE


def extract_title(tree: BeautifulSoup | Tag) -> str:
    for selector in TITLE_SELECTORS:
        match = tree.select_one(selector)
        if match is None:
            continue
        title = match.get_text().strip()
        if title:
            return sanitize_filename(title)
    return DEFAULT_TITLE
