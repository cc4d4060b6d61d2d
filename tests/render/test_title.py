from __future__ import annotations

from folio.render.title import extract_title, sanitize_filename
from folio.tree import parse_document


def test_h1_wins_over_other_candidates() -> None:
    tree = parse_document(
        "<html><head><title>Page title</title></head>"
        "<body><div class='post-title'>Post</div><h1>  Hello:  World / 2024 </h1></body></html>"
    )

    assert extract_title(tree) == "hello-world-2024"


def test_title_element_then_title_class() -> None:
    assert extract_title(parse_document("<title>From Head</title><p>x</p>")) == "from-head"
    assert extract_title(parse_document("<div class='post-title'>My Post</div>")) == "my-post"


def test_empty_heading_is_skipped() -> None:
    assert extract_title(parse_document("<h1>   </h1><h2>Second level</h2>")) == "second-level"


def test_no_candidate_returns_document() -> None:
    assert extract_title(parse_document("<p>Just text</p>")) == "document"


def test_sanitize_filename() -> None:
    assert sanitize_filename('a<b>c:"d"|e?*') == "abcde"
    assert sanitize_filename("--Edge  case--") == "edge-case"
    assert sanitize_filename("???") == "document"
    assert len(sanitize_filename("x" * 300)) == 100
