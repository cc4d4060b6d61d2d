"""Semantic main-content extraction."""

from .content import ContentExtraction, extract_main_content
from .models import ContentBlock, ExtractionResult, ScoredBlock
from .scorer import ExtractionScorer, ScorerSettings

__all__ = [
    "ContentBlock",
    "ContentExtraction",
    "ExtractionResult",
    "ExtractionScorer",
    "ScoredBlock",
    "ScorerSettings",
    "extract_main_content",
]
