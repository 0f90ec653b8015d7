"""
User Document Service - CRUD operations on the `users` collection.

One document per user holds credentials, the nested career profile,
dashboard counters and the activity log. Writes always go through a
single-document operation, so a profile save is all-or-nothing.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from eduhire.core.errors import DuplicateEmailError, StoreFailureError
from eduhire.db.mongodb import get_collection, COLLECTIONS
from eduhire.schemas.schemas import AuthProvider, Profile, UserResponse

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS
# ============================================================

def utc_now() -> datetime:
    """Current UTC time, truncated to the millisecond precision BSON keeps."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def to_object_id(user_id: str) -> Optional[ObjectId]:
    """Parse a user id, None if it is not a valid ObjectId."""
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


def new_user_document(
    email: str,
    password_hash: Optional[str] = None,
    auth_provider: AuthProvider = AuthProvider.local,
    created_via_social: bool = False,
    profile: Optional[Profile] = None,
) -> dict:
    """Build a fresh user document with every default filled in."""
    now = utc_now()
    return {
        "email": email,
        "password": password_hash,
        "authProvider": auth_provider.value,
        "createdViaSocial": created_via_social,
        "profile": (profile or Profile()).model_dump(by_alias=True),
        "createdAt": now,
        "lastUpdated": now,
        "dashboardStats": {"profileViews": 0, "applications": 0, "interviews": 0},
        "activityLog": [],
    }


def serialize_user(doc: dict) -> UserResponse:
    """
    Convert a stored user document to its public shape.
    The password hash never leaves this function.
    """
    data = {key: value for key, value in doc.items() if key not in ("_id", "password")}
    data["id"] = str(doc["_id"])
    return UserResponse.model_validate(data)


# ============================================================
# USERS COLLECTION
# ============================================================

class UserService:
    """
    Handles user document storage.
    Lookups are exact-match on email (case-sensitive, as stored).
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["users"])

    def insert(self, doc: dict) -> str:
        """
        Insert a new user document.

        Returns:
            MongoDB ObjectId as string

        Raises:
            DuplicateEmailError if the unique email index rejects the insert
            StoreFailureError on any other persistence error
        """
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateEmailError()
        except PyMongoError as e:
            logger.exception("Failed to insert user %s", doc.get("email"))
            raise StoreFailureError() from e
        return str(result.inserted_id)

    def get_by_email(self, email: str) -> Optional[dict]:
        """Fetch user by exact email."""
        try:
            return self.collection.find_one({"email": email})
        except PyMongoError as e:
            logger.exception("Failed to look up user by email")
            raise StoreFailureError() from e

    def get_by_id(self, user_id: str) -> Optional[dict]:
        """Fetch user by id. Malformed ids resolve to None."""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        try:
            return self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.exception("Failed to look up user %s", user_id)
            raise StoreFailureError() from e

    def set_password_hash(self, user_id, password_hash: str) -> bool:
        """Persist a password hash on an existing user."""
        try:
            result = self.collection.update_one(
                {"_id": user_id},
                {"$set": {"password": password_hash}}
            )
        except PyMongoError as e:
            logger.exception("Failed to store password for user %s", user_id)
            raise StoreFailureError() from e
        return result.modified_count > 0

    def replace(self, doc: dict) -> bool:
        """
        Write the whole document back (last write wins, no version check).
        Returns True if a document with that _id existed.
        """
        try:
            result = self.collection.replace_one({"_id": doc["_id"]}, doc)
        except PyMongoError as e:
            logger.exception("Failed to save user %s", doc.get("_id"))
            raise StoreFailureError() from e
        return result.matched_count > 0
