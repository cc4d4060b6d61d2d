"""Embedding-based main-content scoring for text blocks."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import math
from typing import Protocol, Sequence

import numpy as np

from folio.extraction.models import ContentBlock, ExtractionResult, ScoredBlock
from folio.semantic.similarity import cosine_similarity, finite_or_zero, mean_vector


logger = logging.getLogger(__name__)

REFERENCE_TEXTS = (
    "This is the main article content with paragraphs of text discussing the topic in detail.",
    "The article explains concepts, provides information, and contains substantive paragraphs.",
    "Educational content with explanations, examples, and detailed descriptions.",
)


class _TextEmbedder(Protocol):
    @property
    def embedding_model(self) -> str:
        ...

    async def embed_text(self, text: str) -> np.ndarray | None:
        ...


@dataclass(frozen=True, slots=True)
class ScorerSettings:
    """Tuning constants for block selection; the defaults are empirically calibrated."""

    min_blocks: int = 3
    batch_size: int = 10
    max_text_chars: int = 2000
    min_threshold: float = 0.3
    percentile: float = 0.3
    rescue_similarity: float = 0.25
    rescue_length: int = 500
    keep_all_fraction: float = 0.8
    fallback_long_text_chars: int = 200
    fallback_long_similarity: float = 0.5
    fallback_short_similarity: float = 0.2

    def __post_init__(self) -> None:
        if self.min_blocks < 1:
            raise ValueError("min_blocks must be >= 1")
        if self.batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if not 0.0 <= self.percentile < 1.0:
            raise ValueError("percentile must be between 0.0 and 1.0")
        if not 0.0 < self.keep_all_fraction <= 1.0:
            raise ValueError("keep_all_fraction must be between 0.0 and 1.0")


def fallback_similarity(text_length: int, settings: ScorerSettings) -> float:
    if text_length > settings.fallback_long_text_chars:
        return settings.fallback_long_similarity
    return settings.fallback_short_similarity


def compute_threshold(similarities: Sequence[float], settings: ScorerSettings) -> float:
    """Similarity at the configured percentile from the top, floored at ``min_threshold``."""

    ranked = sorted(similarities, reverse=True)
    position = math.floor(len(ranked) * settings.percentile)
    if position >= len(ranked):
        return settings.min_threshold
    return max(settings.min_threshold, ranked[position])


def is_kept(block: ScoredBlock, threshold: float, settings: ScorerSettings) -> bool:
    if block.similarity >= threshold:
        return True
    return block.similarity >= settings.rescue_similarity and block.length > settings.rescue_length


class ExtractionScorer:
    """Partitions blocks into main content and boilerplate by similarity to a reference vector."""

    def __init__(self, embedder: _TextEmbedder, *, settings: ScorerSettings | None = None) -> None:
        self._embedder = embedder
        self._settings = settings or ScorerSettings()

    @property
    def settings(self) -> ScorerSettings:
        return self._settings

    async def reference_vector(self) -> np.ndarray | None:
        embeddings = await asyncio.gather(*(self._embed(text) for text in REFERENCE_TEXTS))
        return mean_vector([vector for vector in embeddings if vector is not None])

    async def score(self, blocks: Sequence[ContentBlock]) -> ExtractionResult:
        if not blocks:
            raise ValueError("blocks cannot be empty")

        settings = self._settings
        total = len(blocks)
        if total < settings.min_blocks:
            return self._keep_all(total, reason="too_few_blocks")

        reference = await self.reference_vector()
        if reference is None:
            logger.warning("Reference embeddings unavailable; keeping all %d blocks", total)
            return self._keep_all(total, reason="reference_unavailable")

        scored: list[ScoredBlock | None] = [None] * total
        for start in range(0, total, settings.batch_size):
            batch = blocks[start : start + settings.batch_size]
            embeddings = await asyncio.gather(*(self._embed(block.text) for block in batch))
            for offset, (block, embedding) in enumerate(zip(batch, embeddings)):
                scored[start + offset] = self._score_block(start + offset, block, embedding, reference)

        results = [block for block in scored if block is not None]
        threshold = compute_threshold([block.similarity for block in results], settings)
        keep_indices = sorted(block.index for block in results if is_kept(block, threshold, settings))

        logger.info(
            "Smart extraction: keeping %d of %d blocks (threshold: %.2f)",
            len(keep_indices),
            total,
            threshold,
        )
        return ExtractionResult(
            keep_indices=keep_indices,
            threshold=threshold,
            blocks_processed=total,
            scored=results,
            model=self._embedder.embedding_model,
            keep_all_fraction=settings.keep_all_fraction,
        )

    def _score_block(
        self,
        index: int,
        block: ContentBlock,
        embedding: np.ndarray | None,
        reference: np.ndarray,
    ) -> ScoredBlock:
        length = len(block.text)
        if embedding is None:
            return ScoredBlock(
                index=index,
                similarity=fallback_similarity(length, self._settings),
                length=length,
                embedded=False,
            )
        similarity = finite_or_zero(cosine_similarity(embedding, reference))
        return ScoredBlock(index=index, similarity=similarity, length=length)

    async def _embed(self, text: str) -> np.ndarray | None:
        try:
            return await self._embedder.embed_text(text[: self._settings.max_text_chars])
        except Exception as exc:
            logger.warning("Embedding call raised, treating as missing: %s", exc)
            return None

    def _keep_all(self, total: int, *, reason: str) -> ExtractionResult:
        return ExtractionResult(
            keep_indices=list(range(total)),
            threshold=self._settings.min_threshold,
            blocks_processed=total,
            model=self._embedder.embedding_model,
            skipped_reason=reason,
            keep_all_fraction=self._settings.keep_all_fraction,
        )
