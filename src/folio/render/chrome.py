"""Removal of site chrome: headers, navigation, footers, ads and widgets."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from folio.tree import clone_tree, content_root


logger = logging.getLogger(__name__)

CHROME_SELECTORS = (
    "header",
    "nav",
    "footer",
    '[role="banner"]',
    '[role="navigation"]',
    '[role="contentinfo"]',
    ".header",
    ".navbar",
    ".nav",
    ".navigation",
    ".footer",
    ".site-header",
    ".site-nav",
    ".site-footer",
    ".main-nav",
    ".primary-nav",
    ".ad",
    ".advertisement",
    ".ads",
    ".ad-container",
    ".sidebar",
    ".social-share",
    ".share-buttons",
    ".cookie-banner",
    ".cookie-consent",
    ".newsletter",
    ".subscribe",
    '[class*="ad-"]',
    '[class*="advertisement"]',
    '[id*="ad-"]',
    '[id*="advertisement"]',
)


def strip_chrome(tree: BeautifulSoup) -> BeautifulSoup:
    """Derive a tree without chrome elements inside the document body."""

    working = clone_tree(tree)
    root = content_root(working)
    removed = 0
    for selector in CHROME_SELECTORS:
        for tag in root.select(selector):
            tag.extract()
            removed += 1
    logger.debug("Stripped %d chrome elements", removed)
    return working
