"""Map render options onto the geometry and raster settings of the render engine."""

from __future__ import annotations

from dataclasses import dataclass, field
import math
import re

from bs4 import BeautifulSoup, Tag

from folio.render.options import DEFAULT_FILENAME, RenderOptions
from folio.render.title import DEFAULT_TITLE, extract_title

DPI = 96
MM_TO_INCH = 0.0393701
DEFAULT_MARGIN = 10.0
DEFAULT_PAGE_SIZE = "a4"
CANVAS_SCALE = 2
IMAGE_FORMAT = "jpeg"
IMAGE_QUALITY = 0.95


@dataclass(frozen=True, slots=True)
class PageSize:
    width: float
    height: float
    unit: str = "mm"


PAGE_SIZES: dict[str, PageSize] = {
    "a4": PageSize(210, 297),
    "letter": PageSize(215.9, 279.4),
    "legal": PageSize(215.9, 355.6),
    "tabloid": PageSize(279.4, 431.8),
    "kindle": PageSize(90, 122),
    "smartphone": PageSize(90, 160),
    "smartphone-wide": PageSize(100, 140),
}

_LEADING_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


@dataclass(frozen=True, slots=True)
class PageBreakRules:
    mode: tuple[str, ...] = ("avoid-all", "css", "legacy")
    before: str = ".page-break-before, .chapter-header"
    after: str = ".page-break-after, .book-toc"
    avoid: tuple[str, ...] = ("pre", "code", "table", "img", "figure", "blockquote", "tr")

    def to_dict(self) -> dict[str, object]:
        return {"mode": list(self.mode), "before": self.before, "after": self.after, "avoid": list(self.avoid)}


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Everything the external render engine needs besides the prepared tree."""

    filename: str
    page_width: float
    page_height: float
    unit: str
    orientation: str
    margins: tuple[float, float, float, float]
    content_width: float
    content_width_px: float
    font_scale: float = 1.0
    image_format: str = IMAGE_FORMAT
    image_quality: float = IMAGE_QUALITY
    scale: int = CANVAS_SCALE
    background_color: str | None = "#ffffff"
    page_breaks: PageBreakRules = field(default_factory=PageBreakRules)

    @property
    def margins_px(self) -> tuple[float, float, float, float]:
        top, right, bottom, left = self.margins
        return (to_pixels(top), to_pixels(right), to_pixels(bottom), to_pixels(left))

    @property
    def window_width(self) -> float:
        return self.content_width_px * self.scale

    def to_dict(self) -> dict[str, object]:
        return {
            "filename": self.filename,
            "page_width": self.page_width,
            "page_height": self.page_height,
            "unit": self.unit,
            "orientation": self.orientation,
            "margins": list(self.margins),
            "margins_px": [round(value, 2) for value in self.margins_px],
            "content_width": self.content_width,
            "content_width_px": round(self.content_width_px, 2),
            "window_width": round(self.window_width, 2),
            "font_scale": self.font_scale,
            "image_format": self.image_format,
            "image_quality": self.image_quality,
            "scale": self.scale,
            "background_color": self.background_color,
            "page_breaks": self.page_breaks.to_dict(),
        }


def to_pixels(millimetres: float) -> float:
    return millimetres * MM_TO_INCH * DPI


def parse_number(raw: object) -> float | None:
    """Read a leading number the way form inputs are read (``"12mm"`` is 12)."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _LEADING_NUMBER_RE.match(str(raw))
        if match is None:
            return None
        value = float(match.group(1))
    return value if math.isfinite(value) else None


def _positive_or(raw: object, default: float) -> float:
    value = parse_number(raw)
    if value is None or value <= 0:
        return default
    return value


def _margin(raw: object) -> float:
    value = parse_number(raw)
    if value is None or value < 0:
        return DEFAULT_MARGIN
    return value


def resolve_page_size(page_size: object, custom_width: object = None, custom_height: object = None) -> PageSize:
    key = str(page_size or DEFAULT_PAGE_SIZE).strip().lower()
    default = PAGE_SIZES[DEFAULT_PAGE_SIZE]
    if key == "custom":
        return PageSize(
            width=_positive_or(custom_width, default.width),
            height=_positive_or(custom_height, default.height),
        )
    return PAGE_SIZES.get(key, default)


def resolve_font_scale(raw: object) -> float:
    return _positive_or(raw, 1.0)


def resolve_filename(options: RenderOptions, source_tree: BeautifulSoup | Tag | None = None) -> str:
    explicit = "" if options.filename is None else str(options.filename).strip()
    if explicit and explicit != DEFAULT_FILENAME:
        return explicit
    title = extract_title(source_tree) if source_tree is not None else DEFAULT_TITLE
    return f"{title}.pdf"


def build_render_config(options: RenderOptions, source_tree: BeautifulSoup | Tag | None = None) -> RenderConfig:
    """Resolve geometry and raster settings; invalid inputs fall back to defaults."""

    page = resolve_page_size(options.page_size, options.custom_width, options.custom_height)
    margins = (
        _margin(options.margin_top),
        _margin(options.margin_right),
        _margin(options.margin_bottom),
        _margin(options.margin_left),
    )
    content_width = page.width - margins[1] - margins[3]

    return RenderConfig(
        filename=resolve_filename(options, source_tree),
        page_width=page.width,
        page_height=page.height,
        unit=page.unit,
        orientation="portrait" if page.height > page.width else "landscape",
        margins=margins,
        content_width=content_width,
        content_width_px=to_pixels(content_width),
        font_scale=resolve_font_scale(options.font_scale),
        background_color=None if options.include_background else "#ffffff",
    )
