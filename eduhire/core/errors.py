"""
Domain errors raised by the service layer.

Services raise these; routes turn them into HTTPException responses
through to_http_exception().
"""

from fastapi import HTTPException


class EduHireError(Exception):
    """Base class for all service-level failures."""

    status_code = 500
    message = "Server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class DuplicateEmailError(EduHireError):
    status_code = 400
    message = "User already exists"


class InvalidCredentialsError(EduHireError):
    # Same message for unknown email and wrong password
    status_code = 400
    message = "Invalid Credentials"


class UnauthorizedError(EduHireError):
    status_code = 401
    message = "Token is not valid"


class NotFoundError(EduHireError):
    status_code = 404
    message = "User not found"


class StoreFailureError(EduHireError):
    """Hashing or persistence failed. The write, if any, did not happen."""

    status_code = 500
    message = "Server error"


def to_http_exception(error: EduHireError) -> HTTPException:
    """Map a domain error onto the HTTP response the client sees."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, UnauthorizedError) else None
    return HTTPException(status_code=error.status_code, detail=error.message, headers=headers)
