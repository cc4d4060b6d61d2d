from __future__ import annotations

import pytest

from folio.render.config import PAGE_SIZES, build_render_config, parse_number
from folio.render.options import RenderOptions
from folio.tree import parse_document


def test_a4_with_default_margins() -> None:
    config = build_render_config(
        RenderOptions(page_size="a4", margin_top="10", margin_right="10", margin_bottom="10", margin_left="10")
    )

    assert (config.page_width, config.page_height, config.unit) == (210, 297, "mm")
    assert config.orientation == "portrait"
    assert config.content_width == pytest.approx(190.0)
    assert config.content_width_px == pytest.approx(718.11, abs=0.01)
    assert config.window_width == pytest.approx(config.content_width_px * 2)
    assert config.image_format == "jpeg"
    assert config.image_quality == 0.95
    assert config.scale == 2


@pytest.mark.parametrize("name", sorted(PAGE_SIZES))
def test_named_page_sizes(name: str) -> None:
    config = build_render_config(RenderOptions(page_size=name))

    assert config.page_width == PAGE_SIZES[name].width
    assert config.page_height == PAGE_SIZES[name].height


def test_custom_size_falls_back_per_dimension() -> None:
    invalid = build_render_config(RenderOptions(page_size="custom", custom_width="abc", custom_height="-5"))
    wide = build_render_config(RenderOptions(page_size="custom", custom_width="300", custom_height="200"))

    assert (invalid.page_width, invalid.page_height) == (210, 297)
    assert (wide.page_width, wide.page_height) == (300, 200)
    assert wide.orientation == "landscape"


def test_unknown_page_size_uses_a4() -> None:
    config = build_render_config(RenderOptions(page_size="b5"))

    assert (config.page_width, config.page_height) == (210, 297)


def test_margins_parse_leading_numbers_and_fall_back() -> None:
    config = build_render_config(
        RenderOptions(margin_top="12mm", margin_right="", margin_bottom="0", margin_left="-3")
    )

    assert config.margins == (12.0, 10.0, 0.0, 10.0)
    assert config.content_width == pytest.approx(190.0)


def test_filename_prefers_explicit_then_title() -> None:
    tree = parse_document("<h1>Annual Report: 2024</h1>")

    explicit = build_render_config(RenderOptions(filename="report.pdf"), tree)
    titled = build_render_config(RenderOptions(), tree)
    untitled = build_render_config(RenderOptions(), parse_document("<p>no heading</p>"))

    assert explicit.filename == "report.pdf"
    assert titled.filename == "annual-report-2024.pdf"
    assert untitled.filename == "document.pdf"


def test_font_scale_and_background() -> None:
    config = build_render_config(RenderOptions(font_scale="1.25", include_background=True))
    fallback = build_render_config(RenderOptions(font_scale="big"))

    assert config.font_scale == 1.25
    assert config.background_color is None
    assert fallback.font_scale == 1.0
    assert fallback.background_color == "#ffffff"


def test_to_dict_is_json_ready() -> None:
    payload = build_render_config(RenderOptions()).to_dict()

    assert payload["margins"] == [10.0, 10.0, 10.0, 10.0]
    assert payload["page_breaks"]["avoid"][0] == "pre"
    assert payload["page_breaks"]["mode"] == ["avoid-all", "css", "legacy"]


def test_parse_number() -> None:
    assert parse_number("12.5px") == 12.5
    assert parse_number(" 7") == 7.0
    assert parse_number("px12") is None
    assert parse_number(None) is None
    assert parse_number(True) is None
    assert parse_number(float("nan")) is None


def test_options_from_mapping_accepts_camel_case() -> None:
    options = RenderOptions.from_mapping(
        {"pageSize": "letter", "marginLeft": "15", "bookMode": True, "unknown": 1, "filename": "x.pdf"}
    )

    assert options.page_size == "letter"
    assert options.margin_left == "15"
    assert options.book_mode is True
    assert options.filename == "x.pdf"


def test_non_string_filename_is_coerced() -> None:
    config = build_render_config(RenderOptions.from_mapping({"filename": 5}))

    assert config.filename == "5"
