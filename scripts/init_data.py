#!/usr/bin/env python3
"""
Create or repair every collection file (wishes, pledges, nominations, postcards).

Missing, empty or invalid files are rewritten with the default data; valid
files are left untouched.

Usage:
  python scripts/init_data.py [--data-dir ./data]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from iwd.core.config import StoreConfig, get_settings
from iwd.core.logging import setup_logging
from iwd.repositories.collection_store import CollectionStore


def main() -> None:
    ap = argparse.ArgumentParser(description="Initialize or repair the collection files")
    ap.add_argument("--data-dir", help="Data directory (default: DATA_DIR or ./data)")
    args = ap.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level)
    config = settings.store_config()
    if args.data_dir:
        config = StoreConfig(base_dir=Path(args.data_dir), mode=config.mode)

    store = CollectionStore(config)
    if not store.ensure_ready():
        raise SystemExit(f"Data directory {config.base_dir} is not writable")

    failed = False
    for name, result in store.initialize().items():
        print(f"  {name:<12} {result.reason.value:<20} {len(result.records)} records")
        failed = failed or not result.ok
    if failed:
        raise SystemExit(1)
    print(f"OK: collections ready in {config.base_dir}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
