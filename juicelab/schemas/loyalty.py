from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class PointsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    orders_points: int
    spending_points: int
    referrals_points: int
    total_points: int


class LevelInfoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: dict[str, str]
    icon: str
    total_points: int
    benefits: dict[str, list[str]]


class LevelProgressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current: int
    next: int
    percentage: int
    next_level: Optional[str] = None


class UserLevelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    points: PointsOut
    level: str
    level_info: LevelInfoOut
    progress: LevelProgressOut


class AchievementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: dict[str, str]
    description: dict[str, str]
    icon: str
    rarity: str
    condition_type: str
    condition_value: int


class UserAchievementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    achievement_id: str
    unlocked_at: datetime


class AchievementCheckOut(BaseModel):
    unlocked: list[str]


class AchievementProgressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current: int
    target: int
    percentage: int
