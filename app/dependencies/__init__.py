from app.dependencies.auth import (
    AuthenticatedSession,
    get_current_session,
    get_current_user,
)

__all__ = [
    "AuthenticatedSession",
    "get_current_session",
    "get_current_user",
]
