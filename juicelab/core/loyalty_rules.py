from dataclasses import dataclass

from juicelab.core.config import settings


@dataclass(frozen=True)
class LoyaltyRules:
    # Баллы уровня (не тратятся, только для определения уровня)
    points_per_order: int = 10
    spend_per_point: int = 10        # 1 балл за каждые 10 грн
    points_per_referral: int = 20

    # Бонусы (тратятся при оформлении заказа)
    welcome_bonus: int = settings.WELCOME_BONUS
    referral_signup_bonus: int = settings.REFERRAL_SIGNUP_BONUS
    referral_first_order_bonus: int = settings.REFERRAL_FIRST_ORDER_BONUS
    max_bonus_percent: int = settings.MAX_BONUS_PERCENT

    referral_code_length: int = settings.REFERRAL_CODE_LENGTH
    # Без похожих символов: I, O, 0, 1
    referral_code_alphabet: str = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


RULES = LoyaltyRules()

# Статусы заказа, которые засчитываются в сумму покупок, баллы и достижения
QUALIFYING_ORDER_STATUSES = ("completed", "delivered")
