"""Typographic normalization of text nodes for book output."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, NavigableString

from folio.tree import clone_tree

VERBATIM_TAGS = frozenset({"pre", "code", "kbd", "samp", "script", "style", "textarea"})

_OPENING_CONTEXT = r"(^|[\s(\[{\u2014\u2013])"
_OPEN_DOUBLE_RE = re.compile(_OPENING_CONTEXT + r'"')
_OPEN_SINGLE_RE = re.compile(_OPENING_CONTEXT + r"'")
_DASH_RUN_RE = re.compile(r"-{2,}")
_SPACED_HYPHEN_RE = re.compile(r"(?<=\s)-(?=\s)")
_ELLIPSIS_RE = re.compile(r"\.\.\.")
_SPACE_RUN_RE = re.compile(r" {2,}")


def smart_quotes(text: str) -> str:
    text = _OPEN_DOUBLE_RE.sub("\\1\u201c", text)
    text = text.replace('"', "\u201d")
    text = _OPEN_SINGLE_RE.sub("\\1\u2018", text)
    return text.replace("'", "\u2019")


def em_dashes(text: str) -> str:
    text = _DASH_RUN_RE.sub("\u2014", text)
    return _SPACED_HYPHEN_RE.sub("\u2014", text)


def ellipses(text: str) -> str:
    return _ELLIPSIS_RE.sub("\u2026", text)


def collapse_spaces(text: str) -> str:
    return _SPACE_RUN_RE.sub(" ", text)


# Order matters: no rule produces a pattern an earlier rule consumes.
TYPOGRAPHY_RULES = (smart_quotes, em_dashes, ellipses, collapse_spaces)


def normalize_text(text: str) -> str:
    for rule in TYPOGRAPHY_RULES:
        text = rule(text)
    return text


def _is_verbatim(node: NavigableString) -> bool:
    return any(parent.name in VERBATIM_TAGS for parent in node.parents)


def normalize_typography(tree: BeautifulSoup) -> BeautifulSoup:
    """Derive a tree whose prose text nodes use book typography."""

    working = clone_tree(tree)
    for node in list(working.find_all(string=True)):
        # Comments, doctypes and CDATA are NavigableString subclasses.
        if type(node) is not NavigableString or not node.strip() or _is_verbatim(node):
            continue
        updated = normalize_text(str(node))
        if updated != node:
            node.replace_with(NavigableString(updated))
    return working
