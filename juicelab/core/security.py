# juicelab/core/security.py
import base64
import hashlib
import hmac
import secrets

# Пароли покупателей: PBKDF2-SHA256, соль и хэш хранятся отдельно (base64)
PBKDF2_ITERATIONS = 200_000
SALT_BYTES = 16


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def normalize_phone(phone: str) -> str:
    digits = "".join(ch for ch in (phone or "") if ch.isdigit())
    # Украина: часто вводят 0XXXXXXXXX -> 380XXXXXXXXX
    if len(digits) == 10 and digits.startswith("0"):
        digits = "38" + digits
    return digits


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)


def hash_password(password: str) -> tuple[str, str]:
    """Вернуть (salt, hash) для колонок password_salt / password_hash."""
    salt = secrets.token_bytes(SALT_BYTES)
    return base64.b64encode(salt).decode("ascii"), base64.b64encode(_derive(password, salt)).decode("ascii")


def verify_password(password: str, salt_b64: str | None, hash_b64: str | None) -> bool:
    # аккаунт без пароля (создан без регистрации) войти не может
    if not salt_b64 or not hash_b64:
        return False
    try:
        salt = base64.b64decode(salt_b64, validate=True)
        expected = base64.b64decode(hash_b64, validate=True)
    except ValueError:
        return False
    return hmac.compare_digest(_derive(password, salt), expected)
