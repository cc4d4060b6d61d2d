"""Print preparation and render-engine configuration."""

from .config import PAGE_SIZES, PageSize, RenderConfig, build_render_config
from .engine import HtmlBundleRenderer, RenderBundle, Renderer
from .options import RenderOptions
from .pagination import add_page_break_hints
from .prepare import PreparedDocument, prepare_content
from .sanitize import sanitize_tree
from .title import extract_title, sanitize_filename

__all__ = [
    "PAGE_SIZES",
    "HtmlBundleRenderer",
    "PageSize",
    "PreparedDocument",
    "RenderBundle",
    "RenderConfig",
    "RenderOptions",
    "Renderer",
    "add_page_break_hints",
    "build_render_config",
    "extract_title",
    "prepare_content",
    "sanitize_filename",
    "sanitize_tree",
]
