from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from juicelab.core.config import settings
from juicelab.core.loyalty_rules import RULES
from juicelab.models.bonus_operation import BonusOperation
from juicelab.repositories import LedgerRepository, UserRepository, unit_of_work

logger = logging.getLogger(__name__)


def _check_amount(amount: int) -> int:
    amount = int(amount)
    if amount <= 0:
        raise ValueError("amount must be > 0")
    return amount


# --- Операции внутри чужой транзакции (без commit) ---

def apply_credit(users: UserRepository, ledger: LedgerRepository, user_id: str, amount: int, reason: str) -> bool:
    amount = _check_amount(amount)
    if not users.credit_balance(user_id, amount):
        return False
    ledger.append(user_id, amount, "credit", reason)
    return True


def apply_debit(users: UserRepository, ledger: LedgerRepository, user_id: str, amount: int, reason: str) -> bool:
    amount = _check_amount(amount)
    if not users.debit_balance(user_id, amount):
        return False
    ledger.append(user_id, amount, "debit", reason)
    return True


# --- Публичные операции ledger'а ---

def add_bonus_to_user(db: Session, user_id: str, amount: int, reason: str) -> bool:
    """Начислить бонусы. False, если пользователя нет."""
    users = UserRepository(db)
    ledger = LedgerRepository(db)
    with unit_of_work(db):
        ok = apply_credit(users, ledger, user_id, amount, reason)

    if ok:
        logger.info(f"Bonus credit: user={user_id} amount={amount} reason={reason!r}")
    else:
        logger.warning(f"Bonus credit skipped, user {user_id} not found")
    return ok


def deduct_bonus_from_user(db: Session, user_id: str, amount: int, reason: str) -> bool:
    """
    Списать бонусы. False без изменений (и без записи в журнал),
    если пользователя нет или баланс меньше суммы.
    """
    users = UserRepository(db)
    ledger = LedgerRepository(db)
    with unit_of_work(db):
        ok = apply_debit(users, ledger, user_id, amount, reason)

    if ok:
        logger.info(f"Bonus debit: user={user_id} amount={amount} reason={reason!r}")
    else:
        logger.warning(f"Bonus debit rejected: user={user_id} amount={amount}")
    return ok


def get_user_bonus_history(db: Session, user_id: str) -> list[BonusOperation]:
    return LedgerRepository(db).history(user_id)


def replay_balance(db: Session, user_id: str) -> int:
    return LedgerRepository(db).net_total(user_id)


# --- Оплата заказа бонусами ---

def calculate_max_bonus_payment(order_total: int) -> int:
    return int(order_total) * RULES.max_bonus_percent // 100


@dataclass(frozen=True)
class BonusCalculation:
    bonus_used: int
    final_total: int
    remaining_bonus: int


def calculate_order_total_with_bonus(order_total: int, bonus_amount: int) -> BonusCalculation:
    max_bonus = calculate_max_bonus_payment(order_total)
    bonus_used = max(0, min(int(bonus_amount), max_bonus, int(order_total)))
    return BonusCalculation(
        bonus_used=bonus_used,
        final_total=max(0, int(order_total) - bonus_used),
        remaining_bonus=int(bonus_amount) - bonus_used,
    )


@dataclass(frozen=True)
class BonusPaymentResult:
    success: bool
    bonus_used: int
    final_total: int
    error: str | None = None


def process_order_with_bonus(
    db: Session,
    user_id: str,
    order_id: str,
    order_total: int,
    bonus_to_use: int,
) -> BonusPaymentResult:
    """
    Списание бонусов при оформлении заказа (до оплаты).
    Компенсирующего начисления при неуспешной оплате нет.
    """
    users = UserRepository(db)
    user = users.get(user_id)
    if not user:
        return BonusPaymentResult(False, 0, int(order_total), "user_not_found")

    if user.bonus_balance < int(bonus_to_use):
        return BonusPaymentResult(False, 0, int(order_total), "insufficient_bonus")

    calc = calculate_order_total_with_bonus(order_total, bonus_to_use)

    if calc.bonus_used > 0:
        ok = deduct_bonus_from_user(db, user_id, calc.bonus_used, f"Оплата заказа #{order_id[-6:]}")
        if not ok:
            return BonusPaymentResult(False, 0, int(order_total), "debit_failed")

    return BonusPaymentResult(True, calc.bonus_used, calc.final_total)


def get_referral_link(db: Session, user_id: str, base_url: str | None = None) -> str:
    user = UserRepository(db).get(user_id)
    if not user:
        return ""
    base = (base_url or settings.SITE_URL or "").rstrip("/")
    return f"{base}/register?ref={user.referral_code}"
