#!/usr/bin/env python3
"""
Reset the local JSON collections to the sample dataset.
Usage:
  python scripts/seed_local.py [--data-dir ./localData]
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

# Make the stockapi package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stockapi.core.config import get_settings
from stockapi.core.logs import configure_logging
from stockapi.db.database import Database, DbMode


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the local JSON database with sample data")
    ap.add_argument("--data-dir", help="Directory holding the local-<name>.json files (default: LOCAL_DATA_DIR)")
    args = ap.parse_args()

    if args.data_dir:
        os.environ["LOCAL_DATA_DIR"] = args.data_dir
        get_settings.cache_clear()
    settings = get_settings()
    configure_logging(settings)

    with Database(settings, mode=DbMode.LOCAL) as db:
        counts = db.seed()
    print(f"OK: seeded {settings.data_dir}")
    for name, count in counts.items():
        print(f"  {name}: {count}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
