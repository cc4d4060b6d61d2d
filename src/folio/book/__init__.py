"""Book-mode structural transforms and typography."""

from .chapters import format_chapter_headers
from .dropcaps import apply_drop_caps
from .headings import assign_heading_ids
from .mode import BookModeResult, apply_book_mode
from .styles import build_book_stylesheet
from .toc import TocEntry, collect_toc_entries, insert_table_of_contents
from .typography import normalize_typography

__all__ = [
    "BookModeResult",
    "TocEntry",
    "apply_book_mode",
    "apply_drop_caps",
    "assign_heading_ids",
    "build_book_stylesheet",
    "collect_toc_entries",
    "format_chapter_headers",
    "insert_table_of_contents",
    "normalize_typography",
]
