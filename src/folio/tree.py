"""Document tree helpers shared by every transform pass.

Trees are BeautifulSoup documents built with the lxml HTML parser. Passes
never edit the tree they receive: they call ``clone_tree`` on entry and
return the derived copy.
"""

from __future__ import annotations

import copy

from bs4 import BeautifulSoup, Tag

from folio.text import normalize_whitespace

HTML_PARSER = "lxml"


def parse_document(markup: str) -> BeautifulSoup:
    """Parse markup into a tree that always has ``html`` and ``body`` elements."""

    soup = BeautifulSoup(markup or "", HTML_PARSER)
    if soup.html is None:
        soup.append(soup.new_tag("html"))
    if soup.body is None:
        soup.html.append(soup.new_tag("body"))
    return soup


def clone_tree(tree: BeautifulSoup) -> BeautifulSoup:
    return copy.copy(tree)


def content_root(tree: BeautifulSoup) -> Tag:
    return tree.body or tree


def body_markup(tree: BeautifulSoup) -> str:
    """Serialize the children of the content root."""

    return content_root(tree).decode_contents()


def trimmed_text(tag: Tag) -> str:
    return tag.get_text().strip()


def compact_text(tag: Tag) -> str:
    return normalize_whitespace(tag.get_text())


def class_list(tag: Tag) -> list[str]:
    value = tag.get("class") or []
    if isinstance(value, str):
        return value.split()
    return list(value)


def has_class(tag: Tag, name: str) -> bool:
    return name in class_list(tag)


def add_class(tag: Tag, name: str) -> None:
    classes = class_list(tag)
    if name not in classes:
        classes.append(name)
    tag["class"] = classes


def inside_class(tag: Tag, name: str) -> bool:
    return any(has_class(parent, name) for parent in tag.parents if isinstance(parent, Tag))


def replace_body_markup(tree: BeautifulSoup, markup: str) -> BeautifulSoup:
    """Derive a tree keeping ``tree``'s head but with ``markup`` as body content."""

    working = clone_tree(tree)
    body = content_root(working)
    body.clear()
    fragment = content_root(parse_document(markup))
    for child in list(fragment.contents):
        body.append(child.extract())
    return working
