#!/usr/bin/env python3
"""
Reset one collection to its default data, discarding the stored records.

Usage:
  python scripts/reset_collection.py --name wishes [--data-dir ./data] [--yes]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from iwd.core.config import StoreConfig, get_settings
from iwd.core.logging import setup_logging
from iwd.domain.records import COLLECTIONS
from iwd.repositories.collection_store import CollectionStore


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset a collection to its default data")
    ap.add_argument("--name", required=True, choices=COLLECTIONS, help="Collection to reset")
    ap.add_argument("--data-dir", help="Data directory (default: DATA_DIR or ./data)")
    ap.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    args = ap.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level)
    config = settings.store_config()
    if args.data_dir:
        config = StoreConfig(base_dir=Path(args.data_dir), mode=config.mode)

    store = CollectionStore(config)
    path = store.path_for(args.name)
    if not args.yes:
        answer = input(f"Overwrite {path} with default data? [y/N] ").strip().lower()
        if answer not in {"y", "yes"}:
            raise SystemExit("Aborted")

    result = store.reset(args.name)
    if not result:
        raise SystemExit(f"Failed to reset {args.name}: {result.error or result.reason.value}")
    print("OK: collection reset")
    print(f"  File: {path}")
    print(f"  Records: {len(result.records)}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
