"""
Auth Service - registration, login, social sign-in and token checks.

Credential state of an account is one of:
- NoPassword: created through social sign-in, no hash stored yet
- PasswordSet: a bcrypt hash is stored and is authoritative

The only transition between them is claim_password(): the first password
login on a social account with no password adopts that password.
"""

import logging
from enum import Enum
from typing import Optional

from eduhire.core.auth import create_access_token, hash_password, verify_password, verify_token
from eduhire.core.errors import (
    DuplicateEmailError, InvalidCredentialsError, StoreFailureError, UnauthorizedError
)
from eduhire.schemas.schemas import AuthProvider, PersonalInfo, Profile, UserResponse
from eduhire.services.user_service import UserService, new_user_document, serialize_user

logger = logging.getLogger(__name__)


class CredentialState(str, Enum):
    no_password = "no_password"
    password_set = "password_set"


def credential_state(user: dict) -> CredentialState:
    """Which credential state a stored user is in."""
    if user.get("password"):
        return CredentialState.password_set
    return CredentialState.no_password


def _hash(password: str) -> str:
    try:
        return hash_password(password)
    except (ValueError, TypeError) as e:
        logger.exception("Password hashing failed")
        raise StoreFailureError() from e


class AuthService:
    """Owns the email -> identity mapping and issues bearer tokens."""

    def __init__(self, users: Optional[UserService] = None):
        self.users = users or UserService()

    def register(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> str:
        """
        Create a local account and return a token for it.

        Raises:
            DuplicateEmailError if the email is already registered
        """
        if self.users.get_by_email(email):
            raise DuplicateEmailError()

        profile = Profile(personal=PersonalInfo(first_name=first_name, last_name=last_name))
        doc = new_user_document(
            email=email,
            password_hash=_hash(password),
            auth_provider=AuthProvider.local,
            profile=profile,
        )
        user_id = self.users.insert(doc)
        logger.info("Registered user %s (%s)", user_id, email)
        return create_access_token(user_id)

    def login(self, email: str, password: str) -> str:
        """
        Check credentials and return a token.

        Unknown email and wrong password raise the same error.
        """
        user = self.users.get_by_email(email)
        if not user:
            logger.info("Login failed for %s", email)
            raise InvalidCredentialsError()

        if user.get("createdViaSocial") and credential_state(user) is CredentialState.no_password:
            user = self.claim_password(user, password)

        if not user.get("password") or not verify_password(password, user["password"]):
            logger.info("Login failed for %s", email)
            raise InvalidCredentialsError()

        return create_access_token(str(user["_id"]))

    def claim_password(self, user: dict, password: str) -> dict:
        """NoPassword -> PasswordSet. Persists the hash and returns the updated user."""
        password_hash = _hash(password)
        self.users.set_password_hash(user["_id"], password_hash)
        logger.warning("Social account %s claimed a password on first login", user["_id"])
        return {**user, "password": password_hash}

    def social_auth(
        self,
        email: str,
        profile_seed: Optional[Profile] = None,
        provider: AuthProvider = AuthProvider.google,
    ) -> str:
        """
        Sign in through a social identity. Always succeeds.

        First sight of the email provisions a password-less account seeded
        from profile_seed; later calls never re-seed.
        """
        user = self.users.get_by_email(email)
        if user:
            user_id = str(user["_id"])
        else:
            doc = new_user_document(
                email=email,
                auth_provider=provider,
                created_via_social=True,
                profile=profile_seed,
            )
            try:
                user_id = self.users.insert(doc)
            except DuplicateEmailError:
                # Provisioned concurrently; authenticate the existing identity
                user_id = str(self.users.get_by_email(email)["_id"])
            else:
                logger.info("Provisioned %s account %s (%s)", provider.value, user_id, email)
        return create_access_token(user_id)

    def verify_token(self, token: Optional[str]) -> str:
        """Identity for a valid token; raises UnauthorizedError otherwise."""
        return verify_token(token)

    def current_user(self, token: Optional[str]) -> Optional[UserResponse]:
        """The stored user for a token, or None when not logged in."""
        try:
            identity = self.verify_token(token)
        except UnauthorizedError:
            return None
        user = self.users.get_by_id(identity)
        if not user:
            return None
        return serialize_user(user)
