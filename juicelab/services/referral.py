from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from juicelab.core.loyalty_rules import RULES
from juicelab.models.user import User
from juicelab.repositories import LedgerRepository, UserRepository, unit_of_work
from juicelab.services.achievements import check_and_unlock_achievements
from juicelab.services.bonus import apply_credit

logger = logging.getLogger(__name__)

REASON_WELCOME = "Приветственный бонус"
REASON_SIGNUP = "Реферальная регистрация"
REASON_FIRST_ORDER = "Первый заказ реферала"


def resolve_referrer(users: UserRepository, referral_code: str | None, email: str) -> User | None:
    """Владелец кода, если код валиден и это не сам регистрирующийся."""
    if not referral_code:
        return None
    inviter = users.get_by_referral_code(referral_code)
    if inviter is None:
        logger.info(f"Unknown referral code {referral_code!r} ignored")
        return None
    # Запрет самореферальства
    if inviter.email.lower() == (email or "").strip().lower():
        return None
    return inviter


def attribute_signup(users: UserRepository, ledger: LedgerRepository, new_user: User, inviter: User) -> None:
    """Бонусы за регистрацию по коду. Вызывается внутри транзакции регистрации."""
    apply_credit(users, ledger, new_user.id, RULES.welcome_bonus, REASON_WELCOME)
    apply_credit(users, ledger, inviter.id, RULES.referral_signup_bonus, REASON_SIGNUP)
    logger.info(
        f"Referral signup: {new_user.id} invited by {inviter.id}, "
        f"+{RULES.welcome_bonus} / +{RULES.referral_signup_bonus}"
    )


def after_inviter_rewarded(db: Session, inviter_id: str) -> list[str]:
    return check_and_unlock_achievements(db, inviter_id)


def mark_first_order_completed(db: Session, user_id: str) -> bool:
    """
    Отметить первый заказ. Флаг и бонус пригласившему пишутся одной транзакцией;
    повторный вызов ничего не меняет. True, если флаг переключился сейчас.
    """
    users = UserRepository(db)
    ledger = LedgerRepository(db)

    user = users.get(user_id)
    if not user or user.first_order_completed:
        return False

    inviter_id = user.referred_by
    with unit_of_work(db):
        flipped = users.set_first_order_completed(user_id)
        if flipped and inviter_id:
            apply_credit(users, ledger, inviter_id, RULES.referral_first_order_bonus, REASON_FIRST_ORDER)

    if not flipped:
        return False

    logger.info(f"First order completed: user={user_id}, inviter={inviter_id}")
    if inviter_id:
        after_inviter_rewarded(db, inviter_id)
    return True
