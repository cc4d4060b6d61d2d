"""Page-break hints for the renderer."""

from __future__ import annotations

from bs4 import BeautifulSoup

from folio.render.styling import set_style
from folio.tree import clone_tree

KEEP_TOGETHER_TAGS = ["pre", "code", "table", "img", "figure", "blockquote", "ul", "ol"]
KEEP_WITH_NEXT_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def add_page_break_hints(tree: BeautifulSoup) -> BeautifulSoup:
    """Derive a tree whose unsplittable blocks and headings carry break hints."""

    working = clone_tree(tree)
    for tag in working.find_all(KEEP_TOGETHER_TAGS):
        set_style(tag, page_break_inside="avoid", break_inside="avoid")
    for tag in working.find_all(KEEP_WITH_NEXT_TAGS):
        set_style(tag, page_break_after="avoid", break_after="avoid")
    return working
