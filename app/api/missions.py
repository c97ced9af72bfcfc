"""
Mission API routes - listing and completing the caller's missions.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.dependencies.auth import get_current_user
from app.models import MissionType, User
from app.schemas import MissionCompletionResponse, MissionRecord
from app.services.mission_service import MissionService

router = APIRouter(prefix="/api/missions", tags=["Missions"])


@router.get("", response_model=list[MissionRecord])
async def list_my_missions(
    current_user: User = Depends(get_current_user),
    mission_type: MissionType | None = Query(
        None, alias="type", description="Only return missions of this type"
    ),
    mission_service: MissionService = Depends(),
):
    """Retrieve all missions owned by the current user in catalog order."""
    return await mission_service.list_missions(current_user.id, mission_type)


@router.post("/{mission_id}/complete", response_model=MissionCompletionResponse)
async def complete_my_mission(
    mission_id: UUID,
    current_user: User = Depends(get_current_user),
    mission_service: MissionService = Depends(),
):
    """
    Complete one of the caller's missions and collect its XP reward.

    Unknown, foreign and already-completed missions all answer 404.
    """
    return await mission_service.complete_mission(mission_id, current_user.id)
