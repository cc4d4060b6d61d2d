"""Data structures shared by block collection, scoring and filtering."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ContentBlock:
    """A text unit tied to one content element of the scanned tree."""

    text: str
    source_ref: int


@dataclass(frozen=True, slots=True)
class ScoredBlock:
    index: int
    similarity: float
    length: int
    embedded: bool = True

    def to_dict(self) -> dict[str, int | float | bool]:
        return {
            "index": self.index,
            "similarity": self.similarity,
            "length": self.length,
            "embedded": self.embedded,
        }


@dataclass(slots=True)
class ExtractionResult:
    """Scorer output: kept block indices (ascending) plus diagnostics."""

    keep_indices: list[int]
    threshold: float
    blocks_processed: int
    scored: list[ScoredBlock] = field(default_factory=list)
    model: str | None = None
    skipped_reason: str | None = None
    keep_all_fraction: float = 0.8

    @property
    def blocks_kept(self) -> int:
        return len(self.keep_indices)

    @property
    def is_noop(self) -> bool:
        """True when the caller should keep the unfiltered tree."""

        if self.skipped_reason is not None:
            return True
        return self.blocks_kept > self.blocks_processed * self.keep_all_fraction

    def to_dict(self) -> dict[str, object]:
        return {
            "extracted_indices": list(self.keep_indices),
            "threshold": self.threshold,
            "model": self.model,
            "blocks_processed": self.blocks_processed,
            "blocks_kept": self.blocks_kept,
            "is_noop": self.is_noop,
            "skipped_reason": self.skipped_reason,
            "scores": [block.to_dict() for block in self.scored],
        }
