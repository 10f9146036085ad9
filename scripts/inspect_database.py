#!/usr/bin/env python3
"""
Database Inspection Script

Lists registered users and their subscription status. Password hashes are
never printed.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from sqlalchemy import inspect

from config.database import UserDatabase
from utils.timestamps import to_iso

def print_tables(db):
    """Print every table with its columns."""
    inspector = inspect(db.engine)
    for table_name in inspector.get_table_names():
        columns = [column['name'] for column in inspector.get_columns(table_name)]
        print(f"📋 {table_name}: {', '.join(columns)}")

def print_users(db):
    """Print one line per user."""
    users = db.get_users()
    if not users:
        print("⚠️  No users registered")
        return

    print(f"\n👥 {len(users)} users:")
    for user in users:
        plan = "Premium" if user['is_premium'] else "Free"
        since = f" since {to_iso(user['subscription_date'])}" if user['subscription_date'] else ""
        print(f"   - {user['name']} <{user['email']}> [{plan}{since}] created {to_iso(user['created_at'])}")

def main():
    db = UserDatabase()
    try:
        print_tables(db)
        print_users(db)
    except Exception as e:
        print(f"❌ Error inspecting database: {e}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
