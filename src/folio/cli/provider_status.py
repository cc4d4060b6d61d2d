"""CLI entrypoint: report whether the model server is reachable."""

from __future__ import annotations

import argparse
import asyncio
import json

from dotenv import load_dotenv

load_dotenv()

from folio.semantic.config import ProviderSettings
from folio.semantic.provider import ProviderClient


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check availability of the cleanup and embedding model server")
    parser.parse_args(argv)

    client = ProviderClient(ProviderSettings.from_env())
    status = asyncio.run(client.check_status())

    print(json.dumps(status.to_dict(), ensure_ascii=True, indent=2))
    return 0 if status.available else 1


if __name__ == "__main__":
    raise SystemExit(main())
