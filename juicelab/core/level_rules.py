from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

from juicelab.core.loyalty_rules import RULES

UserLevel = Literal["silver", "gold", "platinum"]

LEVEL_ORDER: tuple[UserLevel, ...] = ("silver", "gold", "platinum")


@dataclass(frozen=True)
class LevelInfo:
    id: UserLevel
    name: dict[str, str]
    icon: str
    total_points: int
    benefits: dict[str, list[str]] = field(default_factory=dict)


USER_LEVELS: dict[str, LevelInfo] = {
    "silver": LevelInfo(
        id="silver",
        name={"uk": "Срібло", "ru": "Серебро"},
        icon="🥈",
        total_points=0,  # стартовый уровень
        benefits={
            "uk": ["Стандартна програма бонусів", "Швидка доставка"],
            "ru": ["Стандартная программа бонусов", "Быстрая доставка"],
        },
    ),
    "gold": LevelInfo(
        id="gold",
        name={"uk": "Золото", "ru": "Золото"},
        icon="🥇",
        total_points=100,
        benefits={
            "uk": ["Бонус +3% до накопичення", "Пріоритетна підтримка", "Спеціальні пропозиції"],
            "ru": ["Бонус +3% к накоплению", "Приоритетная поддержка", "Специальные предложения"],
        },
    ),
    "platinum": LevelInfo(
        id="platinum",
        name={"uk": "Платина", "ru": "Платина"},
        icon="💎",
        total_points=500,
        benefits={
            "uk": [
                "Бонус +5% до накопичення",
                "Пріоритетна підтримка",
                "Ексклюзивні пропозиції",
                "Ранній доступ до новинок",
            ],
            "ru": [
                "Бонус +5% к накоплению",
                "Приоритетная поддержка",
                "Эксклюзивные предложения",
                "Ранний доступ к новинкам",
            ],
        },
    ),
}


@dataclass(frozen=True)
class UserPoints:
    orders_points: int
    spending_points: int
    referrals_points: int
    total_points: int


@dataclass(frozen=True)
class LevelProgress:
    current: int
    next: int
    percentage: int
    next_level: UserLevel | None


def calculate_user_points(orders_count: int, total_spent: float, referrals_count: int) -> UserPoints:
    orders_points = int(orders_count) * RULES.points_per_order
    spending_points = int(total_spent // RULES.spend_per_point)
    referrals_points = int(referrals_count) * RULES.points_per_referral
    return UserPoints(
        orders_points=orders_points,
        spending_points=spending_points,
        referrals_points=referrals_points,
        total_points=orders_points + spending_points + referrals_points,
    )


def get_user_level(total_points: int) -> UserLevel:
    if total_points >= USER_LEVELS["platinum"].total_points:
        return "platinum"
    if total_points >= USER_LEVELS["gold"].total_points:
        return "gold"
    return "silver"


def get_level_info(level: str) -> LevelInfo:
    return USER_LEVELS[level]


def get_level_progress(current_points: int, current_level: str) -> LevelProgress:
    idx = LEVEL_ORDER.index(current_level)

    # Уже максимальный уровень
    if idx == len(LEVEL_ORDER) - 1:
        return LevelProgress(current=current_points, next=current_points, percentage=100, next_level=None)

    next_level = LEVEL_ORDER[idx + 1]
    next_points = USER_LEVELS[next_level].total_points
    level_points = USER_LEVELS[current_level].total_points

    progress = current_points - level_points
    needed = next_points - level_points
    percentage = min(100, math.floor(progress / needed * 100 + 0.5))

    return LevelProgress(current=current_points, next=next_points, percentage=percentage, next_level=next_level)
