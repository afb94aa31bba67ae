"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.errors import ConflictError

from . import repository, schemas, security

logger = logging.getLogger(__name__)


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        email=str(user_row["email"]),
        firstName=user_row.get("firstName"),
        lastName=user_row.get("lastName"),
        isAdmin=bool(user_row.get("isAdmin", False)),
    )


def _issue_token(user_row: dict) -> str:
    return security.build_access_token(
        user_id=int(user_row["id"]),
        email=str(user_row["email"]),
    )


async def register(payload: schemas.RegisterRequest) -> schemas.RegisterResponse:
    """
    Create a regular (non-admin) user and log them in.
    """
    existing = await repository.get_user_by_email(payload.email)
    if existing is not None:
        raise ConflictError("Email is already registered.")

    password_hash = security.hash_password(payload.password)
    user_row = await repository.create_user(
        email=payload.email,
        password_hash=password_hash,
        first_name=payload.firstName,
        last_name=payload.lastName,
    )
    logger.info("user_registered user_id=%s", user_row["id"])

    return schemas.RegisterResponse(
        token=_issue_token(user_row),
        user=_to_user_response(user_row),
    )


async def login(payload: schemas.LoginRequest) -> schemas.TokenResponse:
    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )

    if not bool(user_row.get("isActive", False)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive.",
        )

    is_valid = security.verify_password(payload.password, str(user_row.get("password_hash") or ""))
    if not is_valid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )

    return schemas.TokenResponse(token=_issue_token(user_row))


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
        )

    # Admin status is read from the row, not the token, so revoking it
    # takes effect before the token expires.
    user_row = await repository.get_user_by_id(int(subject))
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found.",
        )
    if not bool(user_row.get("isActive", False)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive.",
        )
    return user_row


def me(user_row: dict) -> schemas.UserResponse:
    return _to_user_response(user_row)
