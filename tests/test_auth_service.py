import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from eduhire.core.auth import create_access_token, decode_token, get_optional_identity
from eduhire.core.errors import DuplicateEmailError, InvalidCredentialsError, UnauthorizedError
from eduhire.schemas.schemas import AuthProvider, PersonalInfo, Profile
from eduhire.services.auth_service import CredentialState, credential_state


def test_register_creates_local_account(auth, users):
    token = auth.register("ada@example.com", "analytical", "Ada", "Lovelace")

    user = users.get_by_email("ada@example.com")
    assert str(user["_id"]) == auth.verify_token(token)
    assert user["authProvider"] == "local"
    assert user["createdViaSocial"] is False
    assert user["password"] != "analytical"
    assert user["profile"]["personal"]["firstName"] == "Ada"
    assert user["profile"]["personal"]["lastName"] == "Lovelace"
    assert user["activityLog"] == []
    assert user["dashboardStats"] == {"profileViews": 0, "applications": 0, "interviews": 0}


def test_register_twice_fails_without_duplicate(auth, users):
    auth.register("ada@example.com", "analytical")

    with pytest.raises(DuplicateEmailError):
        auth.register("ada@example.com", "other-password")

    assert users.collection.count_documents({"email": "ada@example.com"}) == 1


def test_email_match_is_case_sensitive(auth, users):
    auth.register("ada@example.com", "analytical")
    auth.register("Ada@example.com", "analytical")

    assert users.collection.count_documents({}) == 2


def test_login_after_register_resolves_same_identity(auth):
    register_token = auth.register("ada@example.com", "analytical")
    login_token = auth.login("ada@example.com", "analytical")

    assert auth.verify_token(login_token) == auth.verify_token(register_token)


def test_login_errors_are_indistinguishable(auth):
    auth.register("ada@example.com", "analytical")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        auth.login("ada@example.com", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        auth.login("nobody@example.com", "analytical")

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.status_code == unknown_email.value.status_code


def test_token_has_five_day_expiry(auth):
    before = datetime.now(timezone.utc).timestamp()
    token = auth.register("ada@example.com", "analytical")
    payload = decode_token(token)

    assert before + 5 * 86400 - 5 <= payload["exp"] <= before + 5 * 86400 + 5
    assert payload["user"]["id"] == payload["sub"]


def test_verify_token_rejects_missing_tampered_and_expired(auth):
    token = auth.register("ada@example.com", "analytical")
    user_id = auth.verify_token(token)

    with pytest.raises(UnauthorizedError):
        auth.verify_token(None)
    with pytest.raises(UnauthorizedError):
        auth.verify_token(jwt.encode({"sub": user_id}, "some-other-secret", algorithm="HS256"))
    with pytest.raises(UnauthorizedError):
        auth.verify_token(create_access_token(user_id, expires_delta=timedelta(seconds=-10)))


def test_social_auth_is_idempotent_and_never_reseeds(auth, users):
    first_seed = Profile(personal=PersonalInfo(first_name="Grace"))
    second_seed = Profile(personal=PersonalInfo(first_name="Someone Else"))

    first = auth.social_auth("grace@example.com", first_seed)
    second = auth.social_auth("grace@example.com", second_seed)

    assert auth.verify_token(first) == auth.verify_token(second)
    user = users.get_by_email("grace@example.com")
    assert user["profile"]["personal"]["firstName"] == "Grace"
    assert user["authProvider"] == "google"
    assert user["createdViaSocial"] is True
    assert credential_state(user) is CredentialState.no_password
    assert users.collection.count_documents({"email": "grace@example.com"}) == 1


def test_social_auth_records_provider(auth, users):
    auth.social_auth("mark@example.com", None, AuthProvider.facebook)

    user = users.get_by_email("mark@example.com")
    assert user["authProvider"] == "facebook"
    assert user["profile"]["skills"]["programming"] == []


def test_social_auth_signs_in_existing_local_account(auth, users):
    register_token = auth.register("ada@example.com", "analytical")
    social_token = auth.social_auth("ada@example.com", Profile())

    assert auth.verify_token(social_token) == auth.verify_token(register_token)
    assert users.get_by_email("ada@example.com")["authProvider"] == "local"


def test_social_account_claims_password_on_first_login(auth, users):
    auth.social_auth("grace@example.com", Profile())

    token = auth.login("grace@example.com", "first-choice")

    user = users.get_by_email("grace@example.com")
    assert credential_state(user) is CredentialState.password_set
    assert auth.verify_token(token) == str(user["_id"])

    with pytest.raises(InvalidCredentialsError):
        auth.login("grace@example.com", "different")
    assert auth.login("grace@example.com", "first-choice")


def test_login_does_not_mutate_local_account(auth, users):
    auth.register("ada@example.com", "analytical")
    before = users.get_by_email("ada@example.com")

    with pytest.raises(InvalidCredentialsError):
        auth.login("ada@example.com", "wrong")

    assert users.get_by_email("ada@example.com") == before


def test_current_user_excludes_password(auth):
    token = auth.register("ada@example.com", "analytical", "Ada")

    user = auth.current_user(token)

    assert user.email == "ada@example.com"
    assert "password" not in user.model_dump(by_alias=True)


def test_current_user_is_none_when_not_logged_in(auth):
    assert auth.current_user(None) is None
    assert auth.current_user("not-a-token") is None
    assert auth.current_user(create_access_token("0123456789abcdef01234567")) is None


def test_optional_identity_is_none_without_valid_token(auth):
    token = auth.register("ada@example.com", "analytical")

    assert asyncio.run(get_optional_identity(token)) == auth.verify_token(token)
    assert asyncio.run(get_optional_identity(None)) is None
    assert asyncio.run(get_optional_identity("garbage")) is None
