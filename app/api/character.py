"""
Character API routes - profile and attribute point allocation.
"""

from fastapi import APIRouter, Depends

from app.dependencies.auth import get_current_user
from app.models import User
from app.schemas import StatAllocationRequest, UserProfile
from app.services.character_service import CharacterService

router = APIRouter(prefix="/api/character", tags=["Character"])


@router.get("", response_model=UserProfile)
async def get_my_character(
    current_user: User = Depends(get_current_user),
    character_service: CharacterService = Depends(),
):
    return await character_service.get_profile(current_user.id)


@router.post("/stats/allocate", response_model=UserProfile)
async def allocate_stat_point(
    allocation: StatAllocationRequest,
    current_user: User = Depends(get_current_user),
    character_service: CharacterService = Depends(),
):
    """Spend one available attribute point on the requested stat."""
    return await character_service.allocate_point(current_user.id, allocation.stat)
