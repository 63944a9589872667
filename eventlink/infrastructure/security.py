"""Security helpers for hashing, token generation and token revocation."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from hashlib import sha256

from jose import JWTError, jwt
from passlib.context import CryptContext

from eventlink.config import get_settings
from eventlink.domain.entities import User

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)

ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def needs_rehash(hashed_password: str) -> bool:
    return pwd_context.needs_update(hashed_password)


def password_signature(user: User) -> str:
    """Fingerprint that changes whenever the password or deletion state changes."""

    return sha256(f"{user.password}:{int(not user.is_deleted)}".encode()).hexdigest()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def create_user_access_token(user: User) -> str:
    return create_access_token(
        data={
            "sub": str(user.id),
            "role": user.role,
            "pwd_sig": password_signature(user),
        }
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


class TokenBlacklist:
    """Tokens revoked on logout, kept until their own expiry passes."""

    def __init__(self) -> None:
        self._tokens: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def add(self, token: str, expires_at: datetime | None = None) -> None:
        settings = get_settings()
        expiry = expires_at or datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
        with self._lock:
            self._purge_locked()
            self._tokens[token] = expiry

    def __contains__(self, token: object) -> bool:
        with self._lock:
            self._purge_locked()
            return token in self._tokens

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()

    def _purge_locked(self) -> None:
        now = datetime.now(timezone.utc)
        expired = [token for token, expiry in self._tokens.items() if expiry <= now]
        for token in expired:
            del self._tokens[token]


token_blacklist = TokenBlacklist()


def revoke_token(token: str) -> None:
    """Blacklist ``token`` for the remainder of its lifetime."""

    expires_at: datetime | None = None
    try:
        payload = decode_access_token(token)
    except ValueError:
        payload = {}
    exp = payload.get("exp")
    if isinstance(exp, (int, float)):
        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
    token_blacklist.add(token, expires_at)


def is_token_revoked(token: str) -> bool:
    return token in token_blacklist


__all__ = [
    "create_access_token",
    "create_user_access_token",
    "decode_access_token",
    "get_password_hash",
    "is_token_revoked",
    "needs_rehash",
    "password_signature",
    "revoke_token",
    "token_blacklist",
    "verify_password",
]
