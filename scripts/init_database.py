#!/usr/bin/env python3
"""
Database Initialization Script

Run this script to create and initialize the EcoTrip database.
"""

import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from config import settings
from config.database import UserDatabase

def main():
    """Initialize the database and create a backup."""
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    print("🚀 Initializing EcoTrip Database...")
    print("=" * 50)

    try:
        db = UserDatabase()
        db.init_database()
        print("✅ Database initialized successfully!")

        # Create initial backup
        backup_path = db.backup_database()
        if backup_path:
            print(f"✅ Initial backup created: {backup_path}")
        else:
            print("⚠️  Could not create initial backup")

        print("\n📊 Database Structure:")
        print("   - users: Accounts, password hashes and premium status")
        print("   - sessions: Logged-in session pointers")

        print(f"\n👥 Registered users: {db.count_users()}")

    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
