"""Heading discovery and stable section ids."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from folio.tree import clone_tree, compact_text, inside_class

TOC_HEADING_TAGS = ["h1", "h2", "h3"]
TOC_CLASS = "book-toc"
SECTION_ID_PREFIX = "section-"
MIN_LABEL_CHARS = 2


def heading_level(tag: Tag) -> int:
    return int(tag.name[1])


def section_id(ordinal: int) -> str:
    return f"{SECTION_ID_PREFIX}{ordinal}"


def outline_headings(tree: BeautifulSoup | Tag) -> list[Tag]:
    """``h1``-``h3`` in document order, excluding a generated table of contents."""

    return [tag for tag in tree.find_all(TOC_HEADING_TAGS) if not inside_class(tag, TOC_CLASS)]


def linkable_headings(tree: BeautifulSoup | Tag) -> list[tuple[int, Tag]]:
    """Outline headings with a usable label, paired with their outline ordinal."""

    return [
        (ordinal, heading)
        for ordinal, heading in enumerate(outline_headings(tree))
        if len(compact_text(heading)) >= MIN_LABEL_CHARS
    ]


def assign_heading_ids(tree: BeautifulSoup) -> BeautifulSoup:
    """Derive a tree where every linkable heading carries ``section-<ordinal>``.

    Author ids on those headings are replaced; headings too short to be
    listed keep theirs.
    """

    working = clone_tree(tree)
    for ordinal, heading in linkable_headings(working):
        heading["id"] = section_id(ordinal)
    return working
