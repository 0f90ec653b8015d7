"""
Authentication & Profile Routes

POST /auth/register - Register with email/password, get token
POST /auth/login - Login and get token
POST /auth/google - Google sign-in (provisions account on first use)
POST /auth/facebook - Facebook sign-in (provisions account on first use)
GET /auth/me - Get logged in user
PUT /auth/profile - Merge a partial profile into the stored one

Errors use the FastAPI body {"detail": "<message>"}. Clients that read a
`msg` or `error` key should read `detail` instead.
"""

from fastapi import APIRouter, Depends

from eduhire.core.auth import get_current_identity
from eduhire.core.errors import EduHireError, to_http_exception
from eduhire.schemas.schemas import (
    AuthProvider, LoginRequest, ProfileUpdate, RegisterRequest, SocialAuthRequest,
    TokenResponse, UserResponse
)
from eduhire.services.auth_service import AuthService
from eduhire.services.profile_service import ProfileService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service() -> AuthService:
    return AuthService()


def get_profile_service() -> ProfileService:
    return ProfileService()


@router.post("/register", response_model=TokenResponse)
async def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """
    Register a new local account.

    The first and last name seed the profile's personal section.
    """
    try:
        token = auth.register(request.email, request.password, request.first_name, request.last_name)
    except EduHireError as e:
        raise to_http_exception(e)
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """
    Login and receive a token.

    Send it back on every call: x-auth-token: <token>
    """
    try:
        token = auth.login(request.email, request.password)
    except EduHireError as e:
        raise to_http_exception(e)
    return TokenResponse(token=token)


def _social_auth(request: SocialAuthRequest, auth: AuthService, provider: AuthProvider) -> TokenResponse:
    try:
        token = auth.social_auth(request.email, request.profile, provider)
    except EduHireError as e:
        raise to_http_exception(e)
    return TokenResponse(token=token)


@router.post("/google", response_model=TokenResponse)
async def google_auth(request: SocialAuthRequest, auth: AuthService = Depends(get_auth_service)):
    """Sign in with a Google identity. The profile seeds new accounts only."""
    return _social_auth(request, auth, AuthProvider.google)


@router.post("/facebook", response_model=TokenResponse)
async def facebook_auth(request: SocialAuthRequest, auth: AuthService = Depends(get_auth_service)):
    """Sign in with a Facebook identity. The profile seeds new accounts only."""
    return _social_auth(request, auth, AuthProvider.facebook)


@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: str = Depends(get_current_identity),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Get the logged in user's full document (no password hash)."""
    try:
        return profiles.get_user(identity)
    except EduHireError as e:
        raise to_http_exception(e)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    payload: ProfileUpdate,
    identity: str = Depends(get_current_identity),
    profiles: ProfileService = Depends(get_profile_service),
):
    """
    Update the profile. Only the sections present in the body are applied;
    the response is the full updated user.
    """
    try:
        return profiles.update_profile(identity, payload)
    except EduHireError as e:
        raise to_http_exception(e)
