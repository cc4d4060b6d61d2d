"""CLI entrypoint: convert an HTML file into a print bundle."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

load_dotenv()

from folio.book.styles import BOOK_FONTS
from folio.extraction.scorer import ExtractionScorer
from folio.pipeline import CurationOptions, run_pipeline
from folio.render.config import PAGE_SIZES
from folio.render.engine import HtmlBundleRenderer
from folio.render.options import RenderOptions
from folio.semantic.config import ProviderSettings
from folio.semantic.provider import ProviderClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Prepare an HTML page as a paginated, book-style document")
    parser.add_argument("--input", required=True, help="HTML file to convert ('-' reads stdin)")
    parser.add_argument("--output-dir", default="build", help="Directory for the prepared HTML and render settings")
    parser.add_argument("--filename", default=None, help="Output filename (defaults to the document title)")
    parser.add_argument("--page-size", default="a4", choices=[*PAGE_SIZES, "custom"], help="Named page size")
    parser.add_argument("--custom-width", default=None, help="Custom page width in mm")
    parser.add_argument("--custom-height", default=None, help="Custom page height in mm")
    parser.add_argument("--margin-top", default="10", help="Top margin in mm")
    parser.add_argument("--margin-right", default="10", help="Right margin in mm")
    parser.add_argument("--margin-bottom", default="10", help="Bottom margin in mm")
    parser.add_argument("--margin-left", default="10", help="Left margin in mm")
    parser.add_argument("--font-scale", default="1.0", help="Font scale factor")
    parser.add_argument("--include-background", action="store_true", help="Keep background colours and images")
    parser.add_argument("--strip-chrome", action="store_true", help="Remove headers, navigation, footers and ads")
    parser.add_argument("--book-mode", action="store_true", help="Apply book-mode formatting")
    parser.add_argument("--no-toc", action="store_true", help="Book mode without a table of contents")
    parser.add_argument("--no-drop-caps", action="store_true", help="Book mode without drop caps")
    parser.add_argument("--no-chapter-headers", action="store_true", help="Book mode without chapter headers")
    parser.add_argument("--book-font", default="serif", choices=sorted(BOOK_FONTS), help="Book-mode font")
    parser.add_argument("--smart-extract", action="store_true", help="Keep only main content using embeddings")
    parser.add_argument("--ai-cleanup", action="store_true", help="Tidy markup with the language model")
    return parser


def options_from_args(args: argparse.Namespace) -> RenderOptions:
    return RenderOptions(
        page_size=args.page_size,
        custom_width=args.custom_width,
        custom_height=args.custom_height,
        margin_top=args.margin_top,
        margin_right=args.margin_right,
        margin_bottom=args.margin_bottom,
        margin_left=args.margin_left,
        font_scale=args.font_scale,
        include_background=args.include_background,
        strip_chrome=args.strip_chrome,
        book_mode=args.book_mode,
        generate_toc=not args.no_toc,
        drop_caps=not args.no_drop_caps,
        chapter_headers=not args.no_chapter_headers,
        book_font=args.book_font,
        filename=args.filename,
    )


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
    args = build_parser().parse_args(argv)

    markup = _read_input(args.input)
    curation = CurationOptions(smart_extract=args.smart_extract, ai_cleanup=args.ai_cleanup)

    try:
        provider: ProviderClient | None = None
        if curation.smart_extract or curation.ai_cleanup:
            provider = ProviderClient(ProviderSettings.from_env())

        result = asyncio.run(
            run_pipeline(
                markup,
                options_from_args(args),
                renderer=HtmlBundleRenderer(args.output_dir),
                curation=curation,
                scorer=ExtractionScorer(provider) if provider is not None else None,
                cleaner=provider,
            )
        )
    except ValueError as error:
        print(json.dumps({"error": str(error)}, ensure_ascii=True, indent=2))
        return 2

    print(json.dumps(result.to_dict(), ensure_ascii=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
