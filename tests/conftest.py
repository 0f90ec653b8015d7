import os

# Cheap hashing and a fixed secret; must be set before eduhire reads settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import mongomock
import pytest
from fastapi.testclient import TestClient

from eduhire.db.mongodb import init_mongo_indexes, set_mongo_client
from eduhire.main import app
from eduhire.services.auth_service import AuthService
from eduhire.services.profile_service import ProfileService
from eduhire.services.user_service import UserService


@pytest.fixture
def mongo():
    """In-memory MongoDB shared by services and routes for one test."""
    client = mongomock.MongoClient()
    set_mongo_client(client)
    init_mongo_indexes()
    yield client
    set_mongo_client(None)


@pytest.fixture
def users(mongo):
    return UserService()


@pytest.fixture
def auth(users):
    return AuthService(users)


@pytest.fixture
def profiles(users):
    return ProfileService(users)


@pytest.fixture
def client(mongo):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token(client):
    response = client.post("/api/auth/register", json={
        "email": "ada@example.com",
        "password": "analytical",
        "firstName": "Ada",
        "lastName": "Lovelace",
    })
    assert response.status_code == 200
    return response.json()["token"]
