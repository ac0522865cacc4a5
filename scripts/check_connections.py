#!/usr/bin/env python3
"""
Connection Check Script

Verifies the document store is reachable and creates the fair indexes.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.db.mongodb import get_mongo_db, init_mongo_indexes, test_mongo_connection


def main():
    settings = get_settings()
    print("=" * 50)
    print("CAREER FAIR PLATFORM - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Checking MongoDB...")
    print(f"    Database: {settings.mongodb_db}")
    print(f"    Transactions: {'on' if settings.mongodb_transactions else 'off'}")
    if not test_mongo_connection():
        print("    ❌ MongoDB: FAILED")
        return 1
    print("    ✅ MongoDB: CONNECTED")

    print("\n[2] Creating indexes...")
    db = get_mongo_db()
    init_mongo_indexes(db)
    for name in sorted(db.list_collection_names()):
        print(f"    {name}: {len(db[name].index_information())} indexes")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
