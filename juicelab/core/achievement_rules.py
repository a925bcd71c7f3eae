from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

AchievementId = Literal[
    "first_order",
    "five_referrals",
    "spent_1000",
    "spent_5000",
    "ten_orders",
    "vip_client",
    "active_referrer",
    "big_order",
    "bonus_saver",
]

Rarity = Literal["common", "rare", "epic", "legendary"]

ConditionType = Literal[
    "first_order",
    "referrals_count",
    "total_spent",
    "orders_count",
    "single_order_amount",
    "bonuses_used",
]


@dataclass(frozen=True)
class Achievement:
    id: AchievementId
    name: dict[str, str]
    description: dict[str, str]
    icon: str
    rarity: Rarity
    condition_type: ConditionType
    condition_value: int


ACHIEVEMENTS: dict[str, Achievement] = {
    a.id: a
    for a in (
        Achievement(
            id="first_order",
            name={"uk": "Перший крок", "ru": "Первый шаг"},
            description={"uk": "Оформив перше замовлення", "ru": "Оформил первый заказ"},
            icon="🎯",
            rarity="common",
            condition_type="first_order",
            condition_value=1,
        ),
        Achievement(
            id="five_referrals",
            name={"uk": "Дружній", "ru": "Дружелюбный"},
            description={"uk": "Привів 5 друзів", "ru": "Привёл 5 друзей"},
            icon="👥",
            rarity="rare",
            condition_type="referrals_count",
            condition_value=5,
        ),
        Achievement(
            id="spent_1000",
            name={"uk": "Постійний клієнт", "ru": "Постоянный клиент"},
            description={"uk": "Сума покупок >1000 грн", "ru": "Сумма покупок >1000 грн"},
            icon="💰",
            rarity="rare",
            condition_type="total_spent",
            condition_value=1000,
        ),
        Achievement(
            id="spent_5000",
            name={"uk": "VIP клієнт", "ru": "VIP клиент"},
            description={"uk": "Сума покупок >5000 грн", "ru": "Сумма покупок >5000 грн"},
            icon="👑",
            rarity="epic",
            condition_type="total_spent",
            condition_value=5000,
        ),
        Achievement(
            id="ten_orders",
            name={"uk": "Відданий покупець", "ru": "Преданный покупатель"},
            description={"uk": "Зробив 10 замовлень", "ru": "Сделал 10 заказов"},
            icon="🛒",
            rarity="rare",
            condition_type="orders_count",
            condition_value=10,
        ),
        Achievement(
            id="vip_client",
            name={"uk": "Легенда", "ru": "Легенда"},
            description={"uk": "Привів 10+ друзів", "ru": "Привёл 10+ друзей"},
            icon="⭐",
            rarity="legendary",
            condition_type="referrals_count",
            condition_value=10,
        ),
        Achievement(
            id="active_referrer",
            name={"uk": "Активний реферал", "ru": "Активный реферал"},
            description={"uk": "Привів 3+ друзів", "ru": "Привёл 3+ друзей"},
            icon="🚀",
            rarity="common",
            condition_type="referrals_count",
            condition_value=3,
        ),
        Achievement(
            id="big_order",
            name={"uk": "Велике замовлення", "ru": "Большой заказ"},
            description={"uk": "Одне замовлення на суму >500 грн", "ru": "Один заказ на сумму >500 грн"},
            icon="💎",
            rarity="rare",
            condition_type="single_order_amount",
            condition_value=500,
        ),
        Achievement(
            id="bonus_saver",
            name={"uk": "Економний", "ru": "Экономный"},
            description={"uk": "Використав бонуси на суму >100 грн", "ru": "Использовал бонусы на сумму >100 грн"},
            icon="💸",
            rarity="epic",
            condition_type="bonuses_used",
            condition_value=100,
        ),
    )
}


def get_all_achievements() -> list[Achievement]:
    return list(ACHIEVEMENTS.values())


def get_achievement_by_id(achievement_id: str) -> Achievement | None:
    return ACHIEVEMENTS.get(achievement_id)


def get_achievements_by_rarity(rarity: str) -> list[Achievement]:
    return [a for a in ACHIEVEMENTS.values() if a.rarity == rarity]
