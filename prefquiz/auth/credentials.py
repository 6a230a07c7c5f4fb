from __future__ import annotations

"""Credential Store: registration, authentication and password hashing.

Passwords are stored as unsalted SHA-256 hex digests so that existing
``users`` rows keep verifying. Attempt limiting lives in the session
controller, not here.
"""

import hashlib
import re

from ..app.explain import trace as xtrace
from ..errors import DuplicateIdentifier, InvalidCredentials, InvalidFormat
from ..storage.schema import User
from ..storage.store import QuizStore

MAX_FIELD_LENGTH = 8
ALLOWED_SYMBOLS = "!#$%&*+-.=?@^_~"

_FORMAT_RE = re.compile(f"[A-Za-z0-9{re.escape(ALLOWED_SYMBOLS)}]{{1,{MAX_FIELD_LENGTH}}}")


def is_valid_format(value: str) -> bool:
    """True when ``value`` is 1-8 chars of ASCII letters, digits or ALLOWED_SYMBOLS."""
    return isinstance(value, str) and _FORMAT_RE.fullmatch(value) is not None


def check_format(field: str, value: str) -> str:
    if not is_valid_format(value):
        raise InvalidFormat(field, value)
    return value


def hash_password(raw: str) -> str:
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class CredentialStore:
    def __init__(self, store: QuizStore) -> None:
        self.store = store

    def exists(self, user_id: str) -> bool:
        rows = self.store.query("SELECT 1 FROM users WHERE user_id = ?", (user_id,))
        return bool(rows)

    def register(self, user_id: str, raw_password: str) -> User:
        check_format("user ID", user_id)
        check_format("password", raw_password)
        user = User(user_id=user_id, password_hash=hash_password(raw_password))
        with self.store.transaction():
            if self.exists(user_id):
                raise DuplicateIdentifier(user_id)
            self.store.execute(
                "INSERT INTO users (user_id, password) VALUES (?, ?)",
                (user.user_id, user.password_hash),
            )
        xtrace("user_registered", {"user": user_id})
        return user

    def authenticate(self, user_id: str, raw_password: str) -> User:
        rows = self.store.query("SELECT user_id, password FROM users WHERE user_id = ?", (user_id,))
        if not rows or rows[0]["password"] != hash_password(raw_password):
            xtrace("login_failed", {"user": user_id})
            raise InvalidCredentials()
        return User(user_id=rows[0]["user_id"], password_hash=rows[0]["password"])
