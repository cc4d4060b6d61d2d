"""Apply block scores to a tree, keeping only the main content."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from bs4 import BeautifulSoup, Tag

from folio.extraction.blocks import collect_blocks
from folio.extraction.models import ExtractionResult
from folio.extraction.scorer import ExtractionScorer
from folio.tree import clone_tree


logger = logging.getLogger(__name__)

CONTAINER_TAGS = ["div", "section", "article", "aside", "nav", "header", "footer"]
VISIBLE_CONTENT_TAGS = ["p", "h1", "h2", "h3"]


@dataclass(slots=True)
class ContentExtraction:
    tree: BeautifulSoup
    result: ExtractionResult | None = None

    @property
    def filtered(self) -> bool:
        return self.result is not None and not self.result.is_noop


def _emptied_containers(tree: BeautifulSoup, dropped: list[Tag]) -> list[Tag]:
    dropped_ids = {id(tag) for tag in dropped}
    emptied: list[Tag] = []

    for container in tree.find_all(CONTAINER_TAGS):
        descendants = container.find_all(True)
        if not any(id(tag) in dropped_ids for tag in descendants):
            continue
        still_visible = any(
            tag.name in VISIBLE_CONTENT_TAGS and id(tag) not in dropped_ids for tag in descendants
        )
        if not still_visible:
            emptied.append(container)

    return emptied


def remove_dropped_blocks(tree: BeautifulSoup, keep_indices: set[int]) -> BeautifulSoup:
    """Derive a tree without the blocks whose index is not in ``keep_indices``.

    Containers that lost content and no longer hold a paragraph or top-level
    heading are removed too.
    """

    working = clone_tree(tree)
    blocks, elements = collect_blocks(working)

    dropped = [elements[block.source_ref] for index, block in enumerate(blocks) if index not in keep_indices]
    if not dropped:
        return working

    emptied = _emptied_containers(working, dropped)
    for tag in dropped + emptied:
        tag.extract()
    return working


async def extract_main_content(tree: BeautifulSoup, scorer: ExtractionScorer) -> ContentExtraction:
    """Score the tree's blocks and drop boilerplate; never raises on provider trouble."""

    try:
        blocks, _ = collect_blocks(tree)
        if len(blocks) < scorer.settings.min_blocks:
            return ContentExtraction(tree=clone_tree(tree))

        result = await scorer.score(blocks)
        if result.is_noop:
            logger.info("Smart extraction kept most content; using original tree")
            return ContentExtraction(tree=clone_tree(tree), result=result)

        return ContentExtraction(tree=remove_dropped_blocks(tree, set(result.keep_indices)), result=result)
    except Exception:
        logger.warning("Smart extraction failed, using original content", exc_info=True)
        return ContentExtraction(tree=clone_tree(tree))
