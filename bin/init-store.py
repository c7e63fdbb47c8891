"""Create the journal store (if needed) and show what it holds.

Opens the SQLite file, switches it to WAL mode and creates the users and
journals tables when they are missing. Safe to run repeatedly.

Usage:
    bin/init-store.py                       # Uses config/app.yml
    bin/init-store.py --db /tmp/journal.db  # Explicit store file
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from foodjournal.config import AppConfig
from foodjournal.db.connection import Store
from foodjournal.db.errors import StoreInitializationError
from foodjournal.db.schema import TABLES


def main():
    parser = argparse.ArgumentParser(description="Initialize the food journal store")
    parser.add_argument("--db", type=Path, help="Path to the SQLite file (overrides config)")
    args = parser.parse_args()

    config = AppConfig.from_yaml()
    if args.db:
        config.database.sqlite_path = args.db

    store = Store(config)
    try:
        store.ensure_ready()
    except StoreInitializationError as e:
        print(f"Initialization failed: {e}")
        sys.exit(1)

    mode = store.execute("PRAGMA journal_mode").first()["journal_mode"]
    print(f"Store ready: {store.path} (journal_mode={mode})")
    for table in TABLES:
        row = store.execute(f"SELECT count(*) AS cnt FROM {table}").first()  # noqa: S608
        print(f"  {table}: {row['cnt']} rows")

    store.close()


if __name__ == "__main__":
    main()
