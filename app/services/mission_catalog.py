"""
Default mission catalog handed to every new user at registration.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models import MissionType


class MissionTemplate(BaseModel):
    title: str
    description: str
    type: MissionType
    xp_reward: int = Field(..., gt=0)
    icon: str

    model_config = ConfigDict(frozen=True)


DEFAULT_MISSION_CATALOG: tuple[MissionTemplate, ...] = (
    MissionTemplate(
        title="Brush Teeth",
        description="Morning and evening oral hygiene",
        type=MissionType.DAILY,
        xp_reward=25,
        icon="fas fa-tooth",
    ),
    MissionTemplate(
        title="Take a Shower",
        description="Daily personal hygiene",
        type=MissionType.DAILY,
        xp_reward=50,
        icon="fas fa-shower",
    ),
    MissionTemplate(
        title="Exercise (30min)",
        description="Daily physical activity",
        type=MissionType.DAILY,
        xp_reward=75,
        icon="fas fa-dumbbell",
    ),
    MissionTemplate(
        title="Drink 2L of Water",
        description="Stay properly hydrated",
        type=MissionType.DAILY,
        xp_reward=30,
        icon="fas fa-glass-water",
    ),
    MissionTemplate(
        title="Meditate (15min)",
        description="Mental well-being",
        type=MissionType.DAILY,
        xp_reward=40,
        icon="fas fa-om",
    ),
    MissionTemplate(
        title="Read for 1 Hour",
        description="Intellectual growth",
        type=MissionType.SIDE,
        xp_reward=100,
        icon="fas fa-book",
    ),
    MissionTemplate(
        title="Tidy Up Your Room",
        description="Keep your space clean",
        type=MissionType.SIDE,
        xp_reward=150,
        icon="fas fa-broom",
    ),
    MissionTemplate(
        title="Finish the Main Project",
        description="Complete the most important project of the week",
        type=MissionType.MAIN,
        xp_reward=500,
        icon="fas fa-crown",
    ),
)


def build_default_missions(
    user_id: uuid.UUID,
    created_at: datetime,
    catalog: tuple[MissionTemplate, ...] = DEFAULT_MISSION_CATALOG,
) -> list[dict[str, Any]]:
    """Row dicts for a user's starting missions; daily ones are anchored at ``created_at``."""
    return [
        {
            "user_id": user_id,
            "title": template.title,
            "description": template.description,
            "type": template.type.value,
            "xp_reward": template.xp_reward,
            "icon": template.icon,
            "position": position,
            "completed": False,
            "completed_at": None,
            "reset_date": created_at if template.type == MissionType.DAILY else None,
            "created_at": created_at,
            "updated_at": created_at,
        }
        for position, template in enumerate(catalog)
    ]
