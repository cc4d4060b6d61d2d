"""Render engine seam and the print-bundle renderer used by the CLI."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Protocol

from folio.render.config import RenderConfig
from folio.render.prepare import PreparedDocument


class Renderer(Protocol):
    async def render(self, document: PreparedDocument, config: RenderConfig) -> object:
        ...


@dataclass(frozen=True, slots=True)
class RenderBundle:
    html_path: Path
    config_path: Path

    def to_dict(self) -> dict[str, str]:
        return {"html_path": str(self.html_path), "config_path": str(self.config_path)}


class HtmlBundleRenderer:
    """Writes the prepared HTML and its render settings for an external rasterizer."""

    def __init__(self, output_dir: str | Path) -> None:
        self._output_dir = Path(output_dir)

    async def render(self, document: PreparedDocument, config: RenderConfig) -> RenderBundle:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        stem = Path(config.filename).stem or "document"

        html_path = self._output_dir / f"{stem}.html"
        config_path = self._output_dir / f"{stem}.render.json"
        html_path.write_text(document.to_html(), encoding="utf-8")
        config_path.write_text(json.dumps(config.to_dict(), ensure_ascii=True, indent=2), encoding="utf-8")
        return RenderBundle(html_path=html_path, config_path=config_path)
