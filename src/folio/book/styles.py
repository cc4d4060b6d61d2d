"""Book-mode stylesheet built from the chosen font."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BookFont:
    family: str
    name: str


DEFAULT_BOOK_FONT = "serif"

BOOK_FONTS: dict[str, BookFont] = {
    "serif": BookFont(family='Georgia, "Times New Roman", serif', name="Georgia"),
    "modern": BookFont(family='"Merriweather", Georgia, serif', name="Merriweather"),
    "elegant": BookFont(family='"Libre Baskerville", Baskerville, Georgia, serif', name="Libre Baskerville"),
    "readable": BookFont(family='"Literata", Georgia, serif', name="Literata"),
}

_BOOK_CSS = """
.book-content {
    font-family: %(family)s;
    font-size: %(base_size)s;
    line-height: 1.7;
    color: #1a1a1a;
    text-rendering: optimizeLegibility;
}

.book-toc { page-break-after: always; padding: 2em 0; margin-bottom: 2em; }
.toc-title {
    font-size: 1.5em;
    text-align: center;
    margin-bottom: 1.5em;
    font-weight: normal;
    letter-spacing: 0.1em;
    text-transform: uppercase;
}
.toc-list { list-style: none; padding: 0; max-width: 80%%; margin: 0 auto; }
.toc-item { margin: 0.5em 0; display: flex; align-items: baseline; }
.toc-item a { color: inherit; text-decoration: none; border-bottom: 1px dotted #999; flex: 1; }
.toc-number { font-weight: bold; margin-right: 0.5em; min-width: 2em; }
.toc-level-1 { font-weight: 600; font-size: 1.05em; }
.toc-level-2 { padding-left: 1.5em; }
.toc-level-3 { padding-left: 3em; font-size: 0.95em; color: #555; }

.chapter-header { page-break-before: always; text-align: center; padding: 3em 0 2em 0; margin-bottom: 2em; }
.chapter-header:first-of-type { page-break-before: auto; }
.chapter-number {
    font-size: 0.85em;
    letter-spacing: 0.2em;
    text-transform: uppercase;
    color: #666;
    margin-bottom: 0.5em;
}
.chapter-title { font-size: 2em; font-weight: normal; margin: 0; line-height: 1.2; }
.chapter-divider {
    width: 50px;
    height: 3px;
    background: linear-gradient(90deg, transparent, #333, transparent);
    margin: 1.5em auto 0;
}

.section-header {
    font-size: 1.3em;
    font-weight: 600;
    margin-top: 2em;
    margin-bottom: 1em;
    padding-bottom: 0.3em;
    border-bottom: 1px solid #ddd;
}

.drop-cap {
    float: left;
    font-size: 4em;
    line-height: 0.8;
    padding-right: 0.1em;
    padding-top: 0.05em;
    font-weight: bold;
    color: #333;
}
.has-drop-cap { overflow: hidden; }

p { margin-bottom: 1em; text-indent: 1.5em; text-align: justify; hyphens: auto; }
p:first-of-type,
.chapter-header + p,
h2 + p, h3 + p, h4 + p,
blockquote + p,
.has-drop-cap { text-indent: 0; }

blockquote { font-style: italic; margin: 1.5em 2em; padding-left: 1em; border-left: 3px solid #ccc; color: #444; }

pre {
    background: #f8f8f8;
    border: 1px solid #e0e0e0;
    border-radius: 4px;
    padding: 1em;
    font-size: 0.85em;
    overflow-x: auto;
    margin: 1.5em 0;
}
code { font-family: 'JetBrains Mono', Consolas, monospace; font-size: 0.9em; }
p code, li code { background: #f0f0f0; padding: 0.15em 0.4em; border-radius: 3px; }

ul, ol { margin: 1em 0; padding-left: 2em; }
li { margin: 0.3em 0; }

img { max-width: 100%%; height: auto; display: block; margin: 1.5em auto; }
figure { margin: 2em 0; text-align: center; }
figcaption { font-size: 0.9em; color: #666; font-style: italic; margin-top: 0.5em; }

table { width: 100%%; border-collapse: collapse; margin: 1.5em 0; font-size: 0.95em; }
th, td { padding: 0.6em; border-bottom: 1px solid #ddd; text-align: left; }
th { font-weight: 600; border-bottom: 2px solid #333; }

a { color: #0055aa; text-decoration: none; }

@media print {
    @page {
        margin: 2cm;
        @bottom-center { content: counter(page); }
    }
}
"""


def resolve_book_font(choice: str | None) -> BookFont:
    key = (choice or DEFAULT_BOOK_FONT).strip().lower()
    return BOOK_FONTS.get(key, BOOK_FONTS[DEFAULT_BOOK_FONT])


def build_book_stylesheet(book_font: str | None = None, *, base_size: str = "11pt") -> str:
    font = resolve_book_font(book_font)
    return _BOOK_CSS % {"family": font.family, "base_size": base_size}
