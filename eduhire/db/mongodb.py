"""
MongoDB Connection Utility

MongoDB stores one document per user:
- Credentials (email, bcrypt hash, auth provider)
- The nested career profile (personal, education, experience, skills, ...)
- Dashboard counters and the activity log

WHY MongoDB for this?
- The profile is a nested, loosely-shaped document
- Every profile write replaces a single document atomically
- No joins needed: each user document is self-contained
"""
import logging
from typing import Optional
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from eduhire.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def set_mongo_client(client: Optional[MongoClient]) -> None:
    """
    Replace the global client (e.g. with mongomock in tests).
    Passing None resets to a lazily created real client.
    """
    global _client, _db
    _client = client
    _db = None


def get_mongo_db() -> Database:
    """Get the application database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we use:
    - users: credentials + profile document per user
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
}


def init_mongo_indexes():
    """
    Create indexes. Call this once during app startup.
    """
    db = get_mongo_db()

    # Email is the login key and must be unique (case-sensitive, as stored)
    db[COLLECTIONS["users"]].create_index([("email", ASCENDING)], unique=True)

    logger.info("MongoDB indexes created successfully")
