#!/usr/bin/env python3
"""
Create a local SQLite store from a JSON fixture.

Usage:
    python scripts/seed_sample_db.py --json scripts/sample_data.json --db data/retail.db
    DATABASE_URL=sqlite:///data/retail.db retailtransform
"""

import argparse
import sys
from pathlib import Path

from retailtransform.database import get_session, init_database
from retailtransform.sample_data import load_fixture, seed_database


def seed(json_path: Path, db_path: Path, dry_run: bool = False) -> bool:
    """
    Load the fixture into a fresh database file.

    Returns True on success.
    """
    print(f"Loading fixture from {json_path}...")
    data = load_fixture(json_path)

    if dry_run:
        print("\n[DRY RUN] Would insert:")
        for table in ("products", "characters", "character_products"):
            print(f"  {table}: {len(data.get(table, []))}")
        return True

    if db_path.exists():
        print(f"❌ Database already exists: {db_path} (remove it first)")
        return False

    print(f"\nInitializing database at {db_path}...")
    init_database(db_path)
    session = get_session(db_path)
    try:
        counts = seed_database(session, data)
    except Exception as e:
        session.rollback()
        print(f"❌ Failed to seed: {e}")
        return False
    finally:
        session.close()

    print("\n✅ Seed complete!")
    for table, count in counts.items():
        print(f"   {table}: {count}")
    return True


def main():
    parser = argparse.ArgumentParser(description="Create a SQLite store from a JSON fixture")
    parser.add_argument("--json", type=Path, default=Path("scripts/sample_data.json"),
                        help="Path to JSON fixture")
    parser.add_argument("--db", type=Path, default=Path("data/retail.db"),
                        help="Path to SQLite database file")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would be inserted without writing")

    args = parser.parse_args()

    if not args.json.exists():
        print(f"❌ JSON file not found: {args.json}")
        sys.exit(1)

    success = seed(args.json, args.db, dry_run=args.dry_run)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
