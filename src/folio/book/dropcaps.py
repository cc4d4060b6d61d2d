"""Drop caps for the opening paragraph of each section."""

from __future__ import annotations

from bs4 import BeautifulSoup, NavigableString, Tag

from folio.book.chapters import CHAPTER_HEADER_CLASS
from folio.book.headings import TOC_CLASS
from folio.tree import add_class, clone_tree, has_class, inside_class, trimmed_text

MIN_DROP_CAP_CHARS = 50
DROP_CAP_CLASS = "drop-cap"
HAS_DROP_CAP_CLASS = "has-drop-cap"


def _section_anchor(heading: Tag) -> Tag:
    parent = heading.parent
    if isinstance(parent, Tag) and has_class(parent, CHAPTER_HEADER_CLASS):
        return parent
    return heading


def _next_paragraph(anchor: Tag) -> Tag | None:
    for sibling in anchor.find_next_siblings(True):
        if sibling.name == "p":
            return sibling
    return None


def qualifies_for_drop_cap(paragraph: Tag) -> bool:
    if has_class(paragraph, HAS_DROP_CAP_CLASS):
        return False
    text = trimmed_text(paragraph)
    return len(text) > MIN_DROP_CAP_CHARS and text[0].isalpha()


def _wrap_first_letter(tree: BeautifulSoup, paragraph: Tag) -> bool:
    """Put the first letter in a drop-cap span where it stands; surrounding text is kept as is."""

    for node in paragraph.find_all(string=True):
        if type(node) is not NavigableString:
            continue
        stripped = node.lstrip()
        if not stripped:
            continue
        leading = node[: len(node) - len(stripped)]

        glyph = tree.new_tag("span", attrs={"class": DROP_CAP_CLASS})
        glyph.string = stripped[0]
        node.replace_with(glyph)
        if leading:
            glyph.insert_before(NavigableString(leading))
        if stripped[1:]:
            glyph.insert_after(NavigableString(stripped[1:]))
        return True
    return False


def apply_drop_caps(tree: BeautifulSoup) -> BeautifulSoup:
    """Derive a tree with a drop cap on the paragraph following each ``h1``/``h2``.

    Non-paragraph siblings between heading and paragraph are skipped. Only
    paragraphs longer than 50 characters that open with a letter qualify; the
    rest of the paragraph is left as is.
    """

    working = clone_tree(tree)

    for heading in working.find_all(["h1", "h2"]):
        if inside_class(heading, TOC_CLASS):
            continue
        paragraph = _next_paragraph(_section_anchor(heading))
        if paragraph is None or not qualifies_for_drop_cap(paragraph):
            continue

        if _wrap_first_letter(working, paragraph):
            add_class(paragraph, HAS_DROP_CAP_CLASS)

    return working
