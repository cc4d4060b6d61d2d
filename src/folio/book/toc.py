"""Table of contents generation from the heading outline."""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from folio.book.chapters import CHAPTER_HEADER_CLASS
from folio.book.headings import TOC_CLASS, heading_level, linkable_headings, outline_headings, section_id
from folio.tree import clone_tree, compact_text, content_root, has_class

MIN_TOC_HEADINGS = 3
TOC_TITLE = "Table of Contents"


@dataclass(frozen=True, slots=True)
class TocEntry:
    level: int
    label: str
    target_id: str
    number: int | None = None

    @property
    def numbered(self) -> bool:
        return self.number is not None

    def to_dict(self) -> dict[str, str | int | bool | None]:
        return {
            "level": self.level,
            "label": self.label,
            "target_id": self.target_id,
            "number": self.number,
            "numbered": self.numbered,
        }


def collect_toc_entries(tree: BeautifulSoup | Tag) -> list[TocEntry] | None:
    """Entries in document order, or ``None`` when there are too few headings.

    Level 1 and 2 entries are numbered sequentially. Each entry targets
    ``section-<ordinal>``, the id ``insert_table_of_contents`` gives its heading.
    """

    if len(outline_headings(tree)) < MIN_TOC_HEADINGS:
        return None

    entries: list[TocEntry] = []
    number = 0
    for ordinal, heading in linkable_headings(tree):
        level = heading_level(heading)
        label = compact_text(heading)
        if level in (1, 2):
            number += 1
            entries.append(TocEntry(level=level, label=label, target_id=section_id(ordinal), number=number))
        else:
            entries.append(TocEntry(level=level, label=label, target_id=section_id(ordinal)))

    return entries


def table_of_contents_applies(tree: BeautifulSoup | Tag) -> bool:
    """True when ``insert_table_of_contents`` would add a table to ``tree``."""

    return tree.find(class_=TOC_CLASS) is None and len(outline_headings(tree)) >= MIN_TOC_HEADINGS


def render_toc(tree: BeautifulSoup, entries: list[TocEntry]) -> Tag:
    toc = tree.new_tag("div", attrs={"class": TOC_CLASS})

    title = tree.new_tag("h2", attrs={"class": "toc-title"})
    title.string = TOC_TITLE
    toc.append(title)

    listing = tree.new_tag("ul", attrs={"class": "toc-list"})
    for entry in entries:
        item = tree.new_tag("li", attrs={"class": f"toc-item toc-level-{entry.level}"})
        if entry.numbered:
            number = tree.new_tag("span", attrs={"class": "toc-number"})
            number.string = f"{entry.number}."
            item.append(number)
            item.append(" ")
        link = tree.new_tag("a", href=f"#{entry.target_id}")
        link.string = entry.label
        item.append(link)
        listing.append(item)

    toc.append(listing)
    return toc


def _insertion_anchor(tree: BeautifulSoup) -> Tag | None:
    for tag in content_root(tree).find_all(["div", "h1", "h2"]):
        if tag.name != "div":
            return tag
        if has_class(tag, CHAPTER_HEADER_CLASS):
            return tag
    return None


def insert_table_of_contents(tree: BeautifulSoup) -> tuple[BeautifulSoup, list[TocEntry]]:
    """Derive a tree with a table of contents after the first chapter header or heading.

    Listed headings get their ``section-<ordinal>`` id here, so links resolve.
    Without an anchor the table opens the document. Trees with fewer than
    three outline headings, or that already carry a table, come back
    unchanged, author ids included.
    """

    working = clone_tree(tree)
    if not table_of_contents_applies(working):
        return working, []

    entries = collect_toc_entries(working) or []
    for ordinal, heading in linkable_headings(working):
        heading["id"] = section_id(ordinal)

    toc = render_toc(working, entries)
    anchor = _insertion_anchor(working)
    if anchor is not None:
        anchor.insert_after(toc)
    else:
        content_root(working).insert(0, toc)
    return working, entries

