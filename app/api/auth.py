# Authentication API routes for user registration, login, logout and profile

from fastapi import APIRouter, Depends, status

from app.dependencies.auth import (
    AuthenticatedSession,
    get_current_session,
    get_current_user,
)
from app.models import User
from app.schemas import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserProfile,
    UserRegister,
)
from app.services.account_service import AccountService
from app.services.character_service import build_user_profile

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register_user(
    user_data: UserRegister,
    account_service: AccountService = Depends(),
):
    """Register a new user, grant the starting missions and open a session."""
    return await account_service.register(user_data.username, user_data.password)


@router.post("/login", response_model=AuthResponse)
async def login_user(
    user_data: UserLogin,
    account_service: AccountService = Depends(),
):
    """Authenticate, reopen stale daily missions and return a session token."""
    return await account_service.login(user_data.username, user_data.password)


@router.post("/logout", response_model=MessageResponse)
async def logout_user(
    current_session: AuthenticatedSession = Depends(get_current_session),
    account_service: AccountService = Depends(),
):
    await account_service.logout(current_session.session_id)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserProfile)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """Retrieve current authenticated user's profile information."""
    return build_user_profile(current_user)
