from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models import MissionType

StatName = Literal["strength", "agility", "intelligence", "vitality"]


class CharacterStats(BaseModel):
    strength: int = Field(..., ge=0)
    agility: int = Field(..., ge=0)
    intelligence: int = Field(..., ge=0)
    vitality: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class ProgressionState(BaseModel):
    """Snapshot of the fields the progression engine reads and writes."""

    level: int = Field(..., ge=1)
    xp: int = Field(..., ge=0)
    total_xp: int = Field(..., ge=0)
    available_points: int = Field(..., ge=0)
    stats: CharacterStats

    model_config = ConfigDict(from_attributes=True, frozen=True)


class MissionRecord(BaseModel):
    id: UUID
    user_id: UUID
    title: str
    description: str
    icon: str
    type: MissionType
    xp_reward: int = Field(..., gt=0)
    completed: bool = False
    completed_at: datetime | None = None
    reset_date: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class UserRegister(BaseModel):
    username: str = Field(
        ..., min_length=3, max_length=50, description="Username for the new account"
    )
    password: str = Field(
        ..., min_length=6, max_length=72, description="Password for the new account"
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        stripped = v.strip()
        if len(stripped) < 3:
            raise ValueError("Username must contain at least 3 non-blank characters")
        return stripped

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        # bcrypt only accepts 72 bytes of input
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes when UTF-8 encoded")
        return v


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1, description="Username for login")
    password: str = Field(..., min_length=1, description="Password for login")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        # Registration stores the stripped form
        return v.strip()


class Token(BaseModel):
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class Achievement(BaseModel):
    key: str
    title: str
    description: str


class UserProfile(BaseModel):
    id: UUID = Field(..., description="User unique identifier")
    username: str = Field(..., description="Username")
    level: int
    xp: int = Field(..., description="XP within the current level")
    total_xp: int
    xp_to_next_level: int
    available_points: int
    stats: CharacterStats
    rank: str = Field(..., description="Display rank derived from level")
    achievements: list[Achievement] = Field(default_factory=list)
    created_at: datetime


class AuthResponse(Token):
    user: UserProfile


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


class Notification(BaseModel):
    kind: Literal["xp_gained", "level_up"]
    title: str
    message: str


class MissionCompletionResponse(BaseModel):
    mission: MissionRecord
    user: UserProfile
    xp_gained: int
    levels_gained: int
    points_gained: int
    notifications: list[Notification] = Field(default_factory=list)


class StatAllocationRequest(BaseModel):
    stat: StatName = Field(..., description="Attribute that receives one point")
