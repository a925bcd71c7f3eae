"""
User directory: registration, lookups, profile edits.

Not-found is a return value (None / False), not an exception.
Storage failures raise StoreError.
"""
from __future__ import annotations

import logging
import secrets

from sqlalchemy.orm import Session

from juicelab.core.loyalty_rules import RULES
from juicelab.core.security import normalize_email, normalize_phone
from juicelab.models.user import User
from juicelab.repositories import LedgerRepository, UserRepository, unit_of_work
from juicelab.services import referral

logger = logging.getLogger(__name__)

# Поля, которые можно менять через update_user.
# Баланс меняется только через ledger, реферальные связи неизменны.
# first_order_completed и level меняют только referral и levels.
UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "phone",
        "city",
        "address",
        "saved_delivery_method",
        "saved_delivery_city",
        "saved_delivery_address",
        "saved_payment_method",
        "password_salt",
        "password_hash",
    }
)


def generate_referral_code(length: int | None = None) -> str:
    length = length or RULES.referral_code_length
    alphabet = RULES.referral_code_alphabet
    return "".join(secrets.choice(alphabet) for _ in range(length))


def _unique_referral_code(users: UserRepository) -> str:
    while True:
        code = generate_referral_code()
        if not users.referral_code_exists(code):
            return code


def create_user(
    db: Session,
    email: str,
    name: str,
    phone: str | None = None,
    referral_code: str | None = None,
) -> User:
    """
    Регистрация. Если email уже есть, возвращаем существующую запись без изменений.
    С валидным чужим реферальным кодом: referred_by, приветственный бонус
    новому пользователю и бонус пригласившему (одна транзакция).
    """
    users = UserRepository(db)
    ledger = LedgerRepository(db)
    email = normalize_email(email)

    existing = users.get_by_email(email)
    if existing:
        return existing

    inviter = referral.resolve_referrer(users, referral_code, email)

    with unit_of_work(db):
        user = users.add(
            User(
                email=email,
                name=(name or "").strip(),
                phone=normalize_phone(phone) if phone else None,
                referral_code=_unique_referral_code(users),
                referred_by=inviter.id if inviter else None,
                bonus_balance=0,
                first_order_completed=False,
            )
        )
        if inviter:
            referral.attribute_signup(users, ledger, user, inviter)

    logger.info(f"User registered: {user.id} ({email}), referred_by={user.referred_by}")

    if user.referred_by:
        referral.after_inviter_rewarded(db, user.referred_by)

    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    return UserRepository(db).get_by_email(email)


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return UserRepository(db).get(user_id)


def get_user_by_referral_code(db: Session, code: str) -> User | None:
    return UserRepository(db).get_by_referral_code(code)


def get_all_users(db: Session) -> list[User]:
    return UserRepository(db).list_all()


def get_user_referrals(db: Session, user_id: str) -> list[User]:
    return UserRepository(db).list_referrals(user_id)


def update_user(db: Session, user_id: str, **fields) -> bool:
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")

    if "name" in fields and not fields["name"]:
        raise ValueError("name must not be empty")

    if fields.get("phone"):
        fields["phone"] = normalize_phone(fields["phone"])

    users = UserRepository(db)
    with unit_of_work(db):
        ok = users.update_fields(user_id, fields)

    if not ok:
        logger.warning(f"update_user: user {user_id} not found")
    return ok
