import pytest

from juicelab.core.errors import DuplicateEmail, InvalidCredentials
from juicelab.core.security import hash_password, normalize_phone, verify_password
from juicelab.services import auth


def test_password_hashing():
    salt, h = hash_password("секрет")
    assert verify_password("секрет", salt, h)
    assert not verify_password("другой", salt, h)
    assert not verify_password("секрет", "%%%", h)
    assert not verify_password("секрет", None, None)
    assert not verify_password("секрет", salt, "")

    # соль случайная: одинаковый пароль даёт разные хэши
    assert hash_password("секрет")[1] != h


def test_normalize_phone():
    assert normalize_phone("+38 (067) 123-45-67") == "380671234567"
    assert normalize_phone("0671234567") == "380671234567"
    assert normalize_phone("") == ""


def test_register_duplicate_raises(db):
    auth.register(db, "dup@example.com", "Dup", "secret123")
    with pytest.raises(DuplicateEmail):
        auth.register(db, "DUP@example.com", "Dup2", "secret123")


def test_login(db):
    u = auth.register(db, "login@example.com", "Login", "secret123")
    assert auth.login(db, "Login@Example.com", "secret123").id == u.id
    with pytest.raises(InvalidCredentials):
        auth.login(db, "login@example.com", "nope")
    with pytest.raises(InvalidCredentials):
        auth.login(db, "ghost@example.com", "secret123")
