"""Collect scoreable text blocks from a document tree."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from folio.extraction.models import ContentBlock
from folio.tree import trimmed_text

CONTENT_TAGS = ["p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote", "pre", "td", "th", "figcaption", "dt", "dd"]
MIN_BLOCK_CHARS = 20


def content_elements(tree: BeautifulSoup | Tag) -> list[Tag]:
    """Content-bearing elements in document order."""

    return list(tree.find_all(CONTENT_TAGS))


def collect_blocks(
    tree: BeautifulSoup | Tag,
    *,
    min_chars: int = MIN_BLOCK_CHARS,
) -> tuple[list[ContentBlock], dict[int, Tag]]:
    """Return qualifying blocks and a map from ``source_ref`` to its element.

    ``source_ref`` is the element's position among all content elements, so it
    stays valid for the same tree regardless of which blocks qualify.
    """

    blocks: list[ContentBlock] = []
    elements: dict[int, Tag] = {}

    for position, element in enumerate(content_elements(tree)):
        text = trimmed_text(element)
        if len(text) <= min_chars:
            continue
        blocks.append(ContentBlock(text=text, source_ref=position))
        elements[position] = element

    return blocks, elements
