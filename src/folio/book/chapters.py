"""Decorative chapter headers for level-1 headings."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from folio.book.headings import TOC_CLASS
from folio.tree import add_class, clone_tree, compact_text, inside_class

CHAPTER_HEADER_CLASS = "chapter-header"
CHAPTER_TITLE_CLASS = "chapter-title"
SECTION_HEADER_CLASS = "section-header"


def _chapter_header(tree: BeautifulSoup, heading: Tag, number: int) -> Tag:
    wrapper = tree.new_tag("div", attrs={"class": CHAPTER_HEADER_CLASS})

    label = tree.new_tag("div", attrs={"class": "chapter-number"})
    label.string = f"Chapter {number}"

    title = tree.new_tag("h1", attrs={"class": CHAPTER_TITLE_CLASS})
    if heading.get("id"):
        title["id"] = heading["id"]
        wrapper["data-section"] = heading["id"]
    title.string = compact_text(heading)

    divider = tree.new_tag("div", attrs={"class": "chapter-divider"})

    wrapper.append(label)
    wrapper.append(title)
    wrapper.append(divider)
    return wrapper


def format_chapter_headers(tree: BeautifulSoup) -> BeautifulSoup:
    """Derive a tree where each ``h1`` opens a numbered chapter.

    Numbering starts at 1 and follows document order. Headings that already
    sit in a chapter header keep their wrapper but still take a number.
    """

    working = clone_tree(tree)

    for number, heading in enumerate(working.find_all("h1"), start=1):
        if inside_class(heading, CHAPTER_HEADER_CLASS):
            continue
        heading.replace_with(_chapter_header(working, heading, number))

    for heading in working.find_all("h2"):
        if inside_class(heading, TOC_CLASS):
            continue
        add_class(heading, SECTION_HEADER_CLASS)

    return working
