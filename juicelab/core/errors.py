from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger failures the API layer maps to HTTP codes."""


class UserNotFound(LedgerError):
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class InsufficientBonus(LedgerError):
    def __init__(self, user_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient bonus for user {user_id}: requested {requested}, available {available}"
        )
        self.user_id = user_id
        self.requested = requested
        self.available = available


class ValidationFailed(LedgerError, ValueError):
    pass


class DuplicateEmail(LedgerError):
    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
        self.email = email


class InvalidCredentials(LedgerError):
    pass


class StoreError(LedgerError):
    """Storage unavailable or corrupt. Never turned into an empty result."""
