"""
Domain exceptions for the Life RPG service.

Services raise these for business rule violations; the application factory in
``main.py`` translates every ``LifeRPGError`` into a JSON error response using
the exception's ``status_code`` and ``error_code``. Each failure is scoped to
the request that produced it and is never retried by the service.
"""

from typing import Any

from fastapi import status


class LifeRPGError(Exception):
    """
    Base exception for all Life RPG domain errors.

    Args:
        message: Human-readable description returned as ``detail``
        details: Additional structured context for logging
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "life_rpg_error"
    default_message: str = "Request could not be processed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "error_code": self.error_code}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class UnauthenticatedError(LifeRPGError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "unauthenticated"
    default_message = "Authentication required"

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class DuplicateUsernameError(LifeRPGError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "duplicate_username"
    default_message = "Username already registered"


class InvalidCredentialsError(LifeRPGError):
    """Login failure. Unknown usernames and wrong passwords are indistinguishable."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "invalid_credentials"
    default_message = "Incorrect username or password"

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class NotFoundOrAlreadyCompletedError(LifeRPGError):
    """Mission is absent, owned by someone else, or already completed."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "mission_not_found_or_completed"
    default_message = "Mission not found or already completed"


class InsufficientPointsError(LifeRPGError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "insufficient_points"
    default_message = "No attribute points available"


class ValidationFailureError(LifeRPGError):
    status_code = 422
    error_code = "validation_failure"
    default_message = "Invalid input"
