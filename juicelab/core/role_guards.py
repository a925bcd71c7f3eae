# juicelab/core/role_guards.py
"""
Проверка доступа к админским эндпоинтам (ручное начисление/списание
бонусов, смена статуса заказа, список клиентов).

Админ-панель витрины не хранит ролей в базе: доступ даёт общий токен
из настроек, переданный в заголовке X-Admin-Token.
"""
from __future__ import annotations

import hmac

from fastapi import Header, HTTPException

from juicelab.core.config import settings


def is_admin_token(token: str | None) -> bool:
    if not token or not settings.ADMIN_TOKEN:
        return False
    return hmac.compare_digest(token, settings.ADMIN_TOKEN)


def require_admin(x_admin_token: str | None = Header(default=None)) -> None:
    """Только админ."""
    if not is_admin_token(x_admin_token):
        raise HTTPException(status_code=403, detail="Доступ запрещён. Требуется токен администратора")
