#!/usr/bin/env python3
"""
One-off migration: local JSON collections -> SQL database (DATABASE_URL).
Identifiers and timestamps are kept; documents already present are skipped.
Usage:
  python scripts/migrate_local_to_sql.py [--data-dir ./localData] [--database-url sqlite:///stock.db]
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Make the stockapi package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stockapi.core.config import Settings, get_settings
from stockapi.core.logs import configure_logging
from stockapi.db.database import COLLECTION_NAMES, Database, DbMode


def migrate(settings: Settings) -> dict[str, int]:
    copied: dict[str, int] = {}
    with Database(settings, mode=DbMode.LOCAL) as source, Database(settings, mode=DbMode.SQL) as target:
        for name in COLLECTION_NAMES:
            copied[name] = target.collection(name).restore(source.collection(name).find())
    return copied


def main() -> None:
    ap = argparse.ArgumentParser(description="Copy the local JSON collections into the SQL database")
    ap.add_argument("--data-dir", help="Directory holding the local-<name>.json files (default: LOCAL_DATA_DIR)")
    ap.add_argument("--database-url", help="Target database (default: DATABASE_URL)")
    args = ap.parse_args()

    if args.data_dir:
        os.environ["LOCAL_DATA_DIR"] = args.data_dir
    if args.database_url:
        os.environ["DATABASE_URL"] = args.database_url
    # never reseed the source while migrating
    os.environ["SEED_DB"] = "false"
    get_settings.cache_clear()
    settings = get_settings()
    configure_logging(settings)
    if not settings.database_url:
        raise SystemExit("DATABASE_URL is not configured")

    copied = migrate(settings)
    print("OK: migration finished")
    for name, count in copied.items():
        print(f"  {name}: {count}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
