"""End-to-end conversion: curate, sanitize, prepare, configure and render."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Protocol

from folio.extraction.content import extract_main_content
from folio.extraction.models import ExtractionResult
from folio.extraction.scorer import ExtractionScorer
from folio.render.config import RenderConfig, build_render_config
from folio.render.engine import Renderer
from folio.render.options import RenderOptions
from folio.render.prepare import PreparedDocument, prepare_content
from folio.render.sanitize import sanitize_tree
from folio.semantic.provider import CleanupResult
from folio.tree import body_markup, parse_document, replace_body_markup


logger = logging.getLogger(__name__)


class _Cleaner(Protocol):
    async def cleanup_html(self, html: str) -> CleanupResult:
        ...


@dataclass(frozen=True, slots=True)
class CurationOptions:
    smart_extract: bool = False
    ai_cleanup: bool = False


@dataclass(slots=True)
class PipelineResult:
    artifact: object
    document: PreparedDocument
    config: RenderConfig
    extraction: ExtractionResult | None = None
    cleaned: bool = False
    stages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        to_dict = getattr(self.artifact, "to_dict", None)
        return {
            "stages": list(self.stages),
            "extraction": self.extraction.to_dict() if self.extraction is not None else None,
            "cleaned": self.cleaned,
            "toc_entries": [entry.to_dict() for entry in self.document.toc_entries],
            "config": self.config.to_dict(),
            "artifact": to_dict() if callable(to_dict) else None,
        }


async def run_pipeline(
    markup: str,
    options: RenderOptions,
    *,
    renderer: Renderer,
    curation: CurationOptions | None = None,
    scorer: ExtractionScorer | None = None,
    cleaner: _Cleaner | None = None,
) -> PipelineResult:
    """Convert markup into a rendered artifact.

    Extraction and AI cleanup are optional and fail soft; a renderer error is
    the only failure that reaches the caller, and it is not wrapped.
    """

    if not markup or not markup.strip():
        raise ValueError("markup cannot be empty")

    resolved = curation or CurationOptions()
    stages: list[str] = []
    tree = parse_document(markup)

    extraction: ExtractionResult | None = None
    if resolved.smart_extract and scorer is not None:
        outcome = await extract_main_content(tree, scorer)
        tree, extraction = outcome.tree, outcome.result
        if outcome.filtered:
            stages.append("extract")

    cleaned = False
    if resolved.ai_cleanup and cleaner is not None:
        current = body_markup(tree)
        if current.strip():
            try:
                cleanup = await cleaner.cleanup_html(current)
            except Exception:
                logger.warning("AI cleanup raised, using original content", exc_info=True)
            else:
                if cleanup.cleaned:
                    tree = replace_body_markup(tree, cleanup.html)
                    cleaned = True
                    stages.append("cleanup")

    tree = sanitize_tree(tree)
    config = build_render_config(options, tree)
    document = prepare_content(tree, options)
    stages.append("prepare")

    artifact = await renderer.render(document, config)
    stages.append("render")
    return PipelineResult(
        artifact=artifact,
        document=document,
        config=config,
        extraction=extraction,
        cleaned=cleaned,
        stages=stages,
    )
