from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from juicelab.core.achievement_rules import get_achievement_by_id, get_achievements_by_rarity, get_all_achievements
from juicelab.core.database import get_db
from juicelab.schemas.loyalty import (
    AchievementCheckOut,
    AchievementOut,
    AchievementProgressOut,
    UserAchievementOut,
    UserLevelOut,
)
from juicelab.services import achievements as achievements_service
from juicelab.services import levels as levels_service
from juicelab.services import users as users_service

router = APIRouter(tags=["loyalty"])


def _must_user(db: Session, user_id: str) -> None:
    if not users_service.get_user_by_id(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")


@router.get("/levels/{user_id}", response_model=UserLevelOut)
def user_level(user_id: str, db: Session = Depends(get_db)) -> UserLevelOut:
    _must_user(db, user_id)
    data = levels_service.get_user_level_data(db, user_id)
    return UserLevelOut.model_validate(asdict(data))


@router.get("/achievements", response_model=list[AchievementOut])
def achievements_catalogue(rarity: str | None = None) -> list[AchievementOut]:
    items = get_achievements_by_rarity(rarity) if rarity else get_all_achievements()
    return [AchievementOut.model_validate(asdict(a)) for a in items]


@router.get("/achievements/{user_id}", response_model=list[UserAchievementOut])
def user_achievements(user_id: str, db: Session = Depends(get_db)) -> list[UserAchievementOut]:
    _must_user(db, user_id)
    return [UserAchievementOut.model_validate(a) for a in achievements_service.get_user_achievements(db, user_id)]


@router.post("/achievements/{user_id}/check", response_model=AchievementCheckOut)
def check_achievements(user_id: str, db: Session = Depends(get_db)) -> AchievementCheckOut:
    _must_user(db, user_id)
    return AchievementCheckOut(unlocked=achievements_service.check_and_unlock_achievements(db, user_id))


@router.get("/achievements/{user_id}/progress/{achievement_id}", response_model=AchievementProgressOut)
def achievement_progress(user_id: str, achievement_id: str, db: Session = Depends(get_db)) -> AchievementProgressOut:
    _must_user(db, user_id)
    if not get_achievement_by_id(achievement_id):
        raise HTTPException(status_code=404, detail="Achievement not found")
    progress = achievements_service.get_achievement_progress(db, user_id, achievement_id)
    return AchievementProgressOut.model_validate(asdict(progress))
