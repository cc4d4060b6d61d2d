"""Allow-list sanitization of curated markup before it is prepared for print."""

from __future__ import annotations

from bs4 import BeautifulSoup, Comment, Tag

from folio.tree import clone_tree, content_root

ALLOWED_TAGS = frozenset(
    {
        "p", "br", "strong", "em", "b", "i", "u", "s",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "ul", "ol", "li", "a", "img", "blockquote", "pre", "code", "div", "span",
        "table", "thead", "tbody", "tfoot", "tr", "th", "td", "hr",
        "section", "article", "header", "footer", "nav", "main", "aside", "figure", "figcaption",
        "dl", "dt", "dd", "address", "time", "mark", "sub", "sup", "small",
    }
)
ALLOWED_ATTRIBUTES = frozenset(
    {"href", "src", "alt", "title", "class", "id", "style", "target", "width", "height", "datetime", "cite", "lang", "dir"}
)
# Dropped together with their content rather than unwrapped.
FORBIDDEN_CONTENT_TAGS = frozenset(
    {"script", "style", "iframe", "object", "embed", "noscript", "template", "form", "svg", "math"}
)
URL_ATTRIBUTES = frozenset({"href", "src", "cite"})
_UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:text/html")


def _is_unsafe_url(value: str) -> bool:
    compact = "".join(value.split()).lower()
    return compact.startswith(_UNSAFE_SCHEMES)


def _clean_attributes(tag: Tag) -> None:
    for name in list(tag.attrs):
        value = tag.attrs[name]
        if name not in ALLOWED_ATTRIBUTES:
            del tag[name]
        elif name in URL_ATTRIBUTES and isinstance(value, str) and _is_unsafe_url(value):
            del tag[name]


def sanitize_tree(tree: BeautifulSoup) -> BeautifulSoup:
    """Derive a tree whose body holds only allow-listed tags and attributes."""

    working = clone_tree(tree)
    root = content_root(working)

    for comment in root.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()

    for tag in root.find_all(sorted(FORBIDDEN_CONTENT_TAGS)):
        tag.extract()

    for tag in root.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
        else:
            _clean_attributes(tag)

    return working
