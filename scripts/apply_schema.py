#!/usr/bin/env python3
"""Provision the resource tables.

The service itself never migrates; run this once against a fresh database
(or with --check to only confirm the store is reachable). Uses the same
DATABASE_URL handling as the backend.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict

from app.config import settings
from app.db import Store

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "app" / "db" / "schema.sql"


async def _run(check_only: bool) -> Dict[str, Any]:
    store = Store.from_settings(settings)
    await store.open()
    try:
        if check_only:
            return {"db": await store.ping(), "applied": False}
        async with store.connection() as conn:
            await conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
        return {"db": True, "applied": True, "schema": str(SCHEMA_PATH)}
    finally:
        await store.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only ping the database; do not apply the schema",
    )
    args = parser.parse_args(argv)

    payload = asyncio.run(_run(args.check))
    print(json.dumps(payload))
    return 0 if payload["db"] else 1


if __name__ == "__main__":
    sys.exit(main())
