#!/usr/bin/env python3
"""
Migration Script: Import users from a browser storage export

Reads a JSON export of the old browser-based user list (passwords stored
base64-encoded) and imports it into the database with salted password hashes.

Usage:
    python scripts/import_local_storage.py export.json [--yes]
"""

import sys
import argparse
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from config import settings
from config.database import UserDatabase
from utils.local_storage import load_local_storage_export, import_legacy_users

def main():
    """Main migration function."""
    parser = argparse.ArgumentParser(description="Import users from a browser storage export")
    parser.add_argument("export_file", help="JSON export containing the ecotrip_users list")
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    print("🔐 Browser Storage Import Tool")
    print("=" * 40)
    print("Passwords will be re-stored as salted one-way hashes.")
    print("WARNING: This will modify your database!")
    print()

    if not args.yes:
        response = input("Do you want to continue? (yes/no): ").lower().strip()
        if response != 'yes':
            print("Import cancelled.")
            return 1

    try:
        legacy_users = load_local_storage_export(args.export_file)
        db = UserDatabase()
        db.init_database()
        counts = import_legacy_users(db, legacy_users)
    except Exception as e:
        print(f"\n❌ Import failed: {e}")
        return 1

    print(f"\nImported: {counts['imported']} users")
    print(f"Skipped (already registered): {counts['skipped']} users")
    print(f"Invalid records: {counts['invalid']}")
    print("\n✅ Import completed successfully!")
    return 0

if __name__ == "__main__":
    sys.exit(main())
