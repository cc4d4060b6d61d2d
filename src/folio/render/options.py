"""User-facing render options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_FILENAME = "document.pdf"


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options as collected from a form; numeric fields may arrive as raw strings."""

    page_size: str = "a4"
    custom_width: str | float | None = None
    custom_height: str | float | None = None
    margin_top: str | float | None = 10
    margin_right: str | float | None = 10
    margin_bottom: str | float | None = 10
    margin_left: str | float | None = 10
    font_scale: str | float | None = 1.0
    include_background: bool = False
    strip_chrome: bool = False
    book_mode: bool = False
    generate_toc: bool = True
    drop_caps: bool = True
    chapter_headers: bool = True
    book_font: str = "serif"
    filename: str | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RenderOptions":
        """Build options from camelCase or snake_case keys; unknown keys are ignored."""

        aliases = {
            "pageSize": "page_size",
            "customWidth": "custom_width",
            "customHeight": "custom_height",
            "marginTop": "margin_top",
            "marginRight": "margin_right",
            "marginBottom": "margin_bottom",
            "marginLeft": "margin_left",
            "fontScale": "font_scale",
            "includeBackground": "include_background",
            "stripChrome": "strip_chrome",
            "bookMode": "book_mode",
            "generateToc": "generate_toc",
            "dropCaps": "drop_caps",
            "chapterHeaders": "chapter_headers",
            "bookFont": "book_font",
        }
        known = set(cls.__dataclass_fields__)
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            name = aliases.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)
