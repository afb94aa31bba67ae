"""
Auth security helpers: password hashing and JWT access tokens.
"""

from __future__ import annotations

import time
from typing import Any

import bcrypt
import jwt

from core import settings


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor())
    return bcrypt.hashpw(password, salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: int, email: str) -> str:
    # No role claims: permissions are read from the users row per request.
    issued_at = now_epoch_s()
    expires_at = issued_at + (settings.access_token_expire_minutes() * 60)

    payload = {
        "sub": str(user_id),
        "email": email,
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.jwt_secret(), algorithm=settings.jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, settings.jwt_secret(), algorithms=[settings.jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload
