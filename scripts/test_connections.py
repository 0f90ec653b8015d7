#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the MongoDB connection and the users index are working.
Usage: python scripts/test_connections.py
"""
import sys
sys.path.insert(0, '.')

from pymongo.errors import PyMongoError

from eduhire.db.mongodb import test_mongo_connection, init_mongo_indexes, get_mongo_db
from eduhire.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("EDUHIRE PROFILE API - CONNECTION TEST")
    print("=" * 50)

    # Test MongoDB
    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if not test_mongo_connection():
        print("    ❌ MongoDB: FAILED")
        return
    print("    ✅ MongoDB: CONNECTED")

    # Check the unique email index
    print("\n[2] Ensuring indexes...")
    try:
        init_mongo_indexes()
        indexes = get_mongo_db()["users"].index_information()
        unique = [name for name, info in indexes.items() if info.get("unique")]
        print(f"    ✅ Unique indexes on users: {', '.join(unique)}")
    except PyMongoError as e:
        print(f"    ❌ Index setup failed: {e}")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
