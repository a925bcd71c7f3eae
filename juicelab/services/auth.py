from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from juicelab.core.errors import DuplicateEmail, InvalidCredentials
from juicelab.core.security import hash_password, verify_password
from juicelab.models.user import User
from juicelab.services.users import create_user, get_user_by_email, update_user

logger = logging.getLogger(__name__)


def register(
    db: Session,
    email: str,
    name: str,
    password: str,
    phone: str | None = None,
    referral_code: str | None = None,
) -> User:
    # create_user молча возвращает существующего, а регистрация должна отказать
    if get_user_by_email(db, email):
        logger.info(f"Registration rejected, email exists: {email}")
        raise DuplicateEmail(email)

    user = create_user(db, email, name, phone=phone, referral_code=referral_code)

    salt, pw_hash = hash_password(password)
    update_user(db, user.id, password_salt=salt, password_hash=pw_hash)
    return user


def login(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not user.password_hash:
        logger.warning(f"Login failed, unknown email: {email}")
        raise InvalidCredentials("Invalid email or password")

    if not verify_password(password, user.password_salt, user.password_hash):
        logger.warning(f"Login failed, bad password: user={user.id}")
        raise InvalidCredentials("Invalid email or password")

    return user
