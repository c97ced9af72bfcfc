"""
Authentication dependencies for FastAPI route protection.
"""

import uuid
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import UnauthenticatedError
from app.models import User
from app.services.account_service import AccountService
from app.utils.auth import extract_token_identity

# HTTP Bearer token extraction; missing headers are reported as UnauthenticatedError
security = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedSession:
    user: User
    session_id: uuid.UUID


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    account_service: AccountService = Depends(),
) -> AuthenticatedSession:
    """
    Dependency resolving the bearer token to a live session and its user.
    """
    if credentials is None:
        raise UnauthenticatedError()

    identity = extract_token_identity(credentials.credentials)
    if identity is None:
        raise UnauthenticatedError("Could not validate credentials")

    user_id, session_id = identity
    user = await account_service.resolve_user(user_id, session_id)
    return AuthenticatedSession(user=user, session_id=session_id)


async def get_current_user(
    current_session: AuthenticatedSession = Depends(get_current_session),
) -> User:
    """
    Dependency to get the current authenticated user from JWT token.
    """
    return current_session.user
