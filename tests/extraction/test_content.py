from __future__ import annotations

import asyncio
from types import SimpleNamespace

import numpy as np

from folio.extraction.content import extract_main_content, remove_dropped_blocks
from folio.extraction.scorer import ExtractionScorer, ScorerSettings
from folio.tree import parse_document

PAGE = """
<html><body>
<nav><ul><li>Navigation link to the home page</li><li>Navigation link to the about page</li></ul></nav>
<article>
<h1>Understanding tidal energy today</h1>
<p>Tidal energy paragraph one with many relevant words about the topic.</p>
<p>Tidal energy paragraph two with many relevant words about the topic.</p>
</article>
<footer><p>Footer copyright notice for the site 2024</p></footer>
</body></html>
"""


class _KeywordEmbedder:
    embedding_model = "fake-embed"

    async def embed_text(self, text: str) -> np.ndarray | None:
        on_topic = "article" in text or "Tidal" in text or "tidal" in text or "Educational" in text
        return np.asarray([1.0, 0.0] if on_topic else [0.0, 1.0], dtype=np.float32)


class _UniformEmbedder:
    embedding_model = "fake-embed"

    async def embed_text(self, text: str) -> np.ndarray | None:
        return np.asarray([1.0, 0.0], dtype=np.float32)


def test_extract_main_content_drops_boilerplate_and_empty_containers() -> None:
    tree = parse_document(PAGE)

    outcome = asyncio.run(extract_main_content(tree, ExtractionScorer(_KeywordEmbedder())))

    assert outcome.filtered is True
    assert outcome.result is not None
    assert outcome.result.keep_indices == [2, 3, 4]
    assert outcome.tree.find("nav") is None
    assert outcome.tree.find("footer") is None
    assert len(outcome.tree.find("article").find_all("p")) == 2
    # input tree is left alone
    assert tree.find("nav") is not None
    assert tree.find("footer") is not None


def test_keeping_most_blocks_returns_unfiltered_copy() -> None:
    tree = parse_document(PAGE)

    outcome = asyncio.run(extract_main_content(tree, ExtractionScorer(_UniformEmbedder())))

    assert outcome.filtered is False
    assert outcome.result is not None
    assert outcome.result.is_noop is True
    assert outcome.tree is not tree
    assert outcome.tree.find("nav") is not None
    assert len(outcome.tree.find_all("p")) == len(tree.find_all("p"))


def test_scorer_failure_returns_unfiltered_copy() -> None:
    async def _explode(blocks: object) -> object:
        raise RuntimeError("scorer offline")

    scorer = SimpleNamespace(settings=ScorerSettings(), score=_explode)
    tree = parse_document(PAGE)

    outcome = asyncio.run(extract_main_content(tree, scorer))

    assert outcome.result is None
    assert outcome.filtered is False
    assert outcome.tree.find("nav") is not None


def test_too_few_blocks_skip_scoring() -> None:
    tree = parse_document("<p>Only one paragraph is long enough here.</p>")

    outcome = asyncio.run(extract_main_content(tree, ExtractionScorer(_KeywordEmbedder())))

    assert outcome.result is None
    assert outcome.tree.find("p") is not None


def test_remove_dropped_blocks_keeps_container_with_remaining_paragraph() -> None:
    tree = parse_document(
        "<div><p>First paragraph that is long enough.</p>"
        "<p>Second paragraph that is long enough.</p></div>"
    )

    filtered = remove_dropped_blocks(tree, {1})

    paragraphs = [p.get_text() for p in filtered.find_all("p")]
    assert paragraphs == ["Second paragraph that is long enough."]
    assert filtered.find("div") is not None
