"""Turn a curated tree into the print-ready tree handed to the render engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from folio.book.mode import apply_book_mode
from folio.book.toc import TocEntry
from folio.render.chrome import strip_chrome
from folio.render.config import resolve_font_scale
from folio.render.options import RenderOptions
from folio.render.pagination import add_page_break_hints
from folio.render.styling import parse_style, set_style
from folio.tree import class_list, clone_tree, content_root

WHITE = "white"


@dataclass(slots=True)
class PreparedDocument:
    tree: BeautifulSoup
    stylesheet: str | None = None
    toc_entries: list[TocEntry] = field(default_factory=list)

    def to_html(self) -> str:
        """Serialize as a standalone document with the stylesheet in its head."""

        output = clone_tree(self.tree)
        head = output.head
        if head is None:
            head = output.new_tag("head")
            output.html.insert(0, head)
        if head.find("meta", charset=True) is None:
            head.insert(0, output.new_tag("meta", charset="utf-8"))
        if self.stylesheet:
            style = output.new_tag("style")
            style.string = self.stylesheet
            head.append(style)
        return "<!DOCTYPE html>\n" + str(output.html)


def _has_background_image(declarations: dict[str, str]) -> bool:
    image = declarations.get("background-image", "")
    shorthand = declarations.get("background", "")
    return (bool(image) and image != "none") or "url(" in shorthand


def remove_backgrounds(tree: BeautifulSoup) -> BeautifulSoup:
    """Derive a tree printed on white: no background images, white page and ``bg-`` blocks."""

    working = clone_tree(tree)
    root = content_root(working)
    set_style(root, background_color=WHITE)

    for tag in root.find_all(True):
        if _has_background_image(parse_style(tag.get("style"))):
            set_style(tag, background_image="none")
        if any("bg-" in name for name in class_list(tag)):
            set_style(tag, background_color=WHITE)
    return working


def prepare_content(tree: BeautifulSoup, options: RenderOptions) -> PreparedDocument:
    """Derive the print tree: font scale, chrome removal, book mode, break hints, backgrounds."""

    working = clone_tree(tree)

    scale = resolve_font_scale(options.font_scale)
    if scale != 1.0:
        set_style(content_root(working), font_size=f"{scale * 100:g}%")

    if options.strip_chrome:
        working = strip_chrome(working)

    stylesheet: str | None = None
    entries: list[TocEntry] = []
    if options.book_mode:
        book = apply_book_mode(
            working,
            book_font=options.book_font,
            generate_toc=options.generate_toc,
            drop_caps=options.drop_caps,
            chapter_headers=options.chapter_headers,
        )
        working, stylesheet, entries = book.tree, book.stylesheet, book.toc_entries

    working = add_page_break_hints(working)

    if not options.include_background:
        working = remove_backgrounds(working)

    set_style(content_root(working), width="100%", max_width="none", overflow="visible")
    return PreparedDocument(tree=working, stylesheet=stylesheet, toc_entries=entries)
