#!/usr/bin/env python3
"""
Load citizen records from a JSON file into the database.

Usage:
    python scripts/load_citizens_json.py --json data/citizens.json --db data/eca.db
"""

import argparse
import json
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ecasystem.database import Citizen, init_database, get_session
from ecasystem.normalize import to_citizen_values
from ecasystem.schema import validate_citizen
from ecasystem.verification import FORM_FIELDS

EXTRA_FIELDS = ["status", "remarks", "encoded_by"]


def load(json_path: Path, db_path: Path, dry_run: bool = False) -> bool:
    """
    Insert every valid citizen from a JSON list into the database.

    Records that fail validation are skipped and reported. No duplicate
    check is applied; run `eca duplicates` afterwards.

    Args:
        json_path: Path to a JSON array of citizen forms
        db_path: Path to SQLite database file
        dry_run: If True, don't write to database
    """
    print(f"Loading citizens from {json_path}...")
    with open(json_path, encoding="utf-8") as f:
        rows = json.load(f)
    print(f"Found {len(rows)} citizens in JSON file")

    if dry_run:
        print("\n[DRY RUN] Would load the following citizens:")
        for i, row in enumerate(rows[:5], 1):
            print(f"  {i}. {row.get('last_name')}, {row.get('first_name')} ({row.get('birth_date')})")
        if len(rows) > 5:
            print(f"  ... and {len(rows) - 5} more")
        return True

    print(f"\nInitializing database at {db_path}...")
    init_database(db_path)
    session = get_session(db_path)

    loaded = 0
    skipped = 0

    for i, row in enumerate(rows, 1):
        errors = validate_citizen(row)
        if errors:
            print(f"Skipping row {i}: {'; '.join(errors)}")
            skipped += 1
            continue
        values = to_citizen_values({k: row[k] for k in FORM_FIELDS + EXTRA_FIELDS if k in row})
        session.add(Citizen(**values))
        loaded += 1

        if loaded % 100 == 0:
            print(f"  Loaded {loaded} citizens...")

    try:
        session.commit()
        print("\nLoad complete!")
        print(f"   Loaded:  {loaded}")
        print(f"   Skipped: {skipped}")
    except Exception as e:
        session.rollback()
        print(f"Failed to commit: {e}")
        return False
    finally:
        session.close()

    return True


def main():
    parser = argparse.ArgumentParser(description="Load citizens from JSON into the database")
    parser.add_argument("--json", type=Path, default=Path("data/citizens.json"),
                       help="Path to JSON file with a list of citizens")
    parser.add_argument("--db", type=Path, default=Path("data/eca.db"),
                       help="Path to SQLite database file")
    parser.add_argument("--dry-run", action="store_true",
                       help="Show what would be loaded without writing")

    args = parser.parse_args()

    if not args.json.exists():
        print(f"JSON file not found: {args.json}")
        sys.exit(1)

    if not load(args.json, args.db, dry_run=args.dry_run):
        sys.exit(1)


if __name__ == "__main__":
    main()
