"""Book mode: the ordered structural and typographic passes."""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from folio.book.chapters import format_chapter_headers
from folio.book.dropcaps import apply_drop_caps
from folio.book.headings import assign_heading_ids
from folio.book.styles import build_book_stylesheet
from folio.book.toc import TocEntry, insert_table_of_contents, table_of_contents_applies
from folio.book.typography import normalize_typography
from folio.tree import add_class, content_root

BOOK_CONTENT_CLASS = "book-content"


@dataclass(slots=True)
class BookModeResult:
    tree: BeautifulSoup
    stylesheet: str
    toc_entries: list[TocEntry] = field(default_factory=list)


def apply_book_mode(
    tree: BeautifulSoup,
    *,
    book_font: str | None = None,
    generate_toc: bool = True,
    drop_caps: bool = True,
    chapter_headers: bool = True,
) -> BookModeResult:
    working = normalize_typography(tree)
    with_toc = generate_toc and table_of_contents_applies(working)

    if chapter_headers:
        # Chapter wrappers copy the heading id, so TOC ids must exist first.
        if with_toc:
            working = assign_heading_ids(working)
        working = format_chapter_headers(working)

    entries: list[TocEntry] = []
    if with_toc:
        working, entries = insert_table_of_contents(working)

    if drop_caps:
        working = apply_drop_caps(working)

    add_class(content_root(working), BOOK_CONTENT_CLASS)
    return BookModeResult(tree=working, stylesheet=build_book_stylesheet(book_font), toc_entries=entries)
