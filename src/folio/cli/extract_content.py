"""CLI entrypoint: score the text blocks of an HTML file for main content."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from folio.extraction.blocks import collect_blocks
from folio.extraction.content import remove_dropped_blocks
from folio.extraction.scorer import ExtractionScorer
from folio.semantic.config import ProviderSettings
from folio.semantic.provider import ProviderClient
from folio.tree import body_markup, parse_document


async def _score(markup: str, scorer: ExtractionScorer) -> tuple[dict[str, object], str | None]:
    tree = parse_document(markup)
    blocks, _ = collect_blocks(tree)
    if not blocks:
        raise ValueError("document has no text blocks longer than 20 characters")

    result = await scorer.score(blocks)
    payload = result.to_dict()
    payload["blocks"] = [block.text[:120] for block in blocks]

    filtered = None if result.is_noop else body_markup(remove_dropped_blocks(tree, set(result.keep_indices)))
    return payload, filtered


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Score HTML text blocks against a main-content reference embedding")
    parser.add_argument("--input", required=True, help="HTML file to score")
    parser.add_argument("--write-filtered", default=None, help="Write the filtered body markup to this path")
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)

    markup = Path(args.input).read_text(encoding="utf-8")
    scorer = ExtractionScorer(ProviderClient(ProviderSettings.from_env()))
    try:
        payload, filtered = asyncio.run(_score(markup, scorer))
    except ValueError as error:
        print(json.dumps({"error": str(error)}, ensure_ascii=True, indent=2))
        return 2

    if args.write_filtered and filtered is not None:
        Path(args.write_filtered).write_text(filtered, encoding="utf-8")
        payload["filtered_path"] = args.write_filtered

    print(json.dumps(payload, ensure_ascii=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
