"""
User persistence helpers.
"""

from __future__ import annotations

from core import db

USER_COLUMNS = """
  id,
  email,
  password_hash,
  first_name AS "firstName",
  last_name AS "lastName",
  is_admin AS "isAdmin",
  is_active AS "isActive",
  created_at AS "createdAt"
"""


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(
    *,
    email: str,
    password_hash: str,
    first_name: str | None = None,
    last_name: str | None = None,
    is_admin: bool = False,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO users (email, password_hash, first_name, last_name, is_admin)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {USER_COLUMNS}
        """,
        normalize_email(email),
        password_hash,
        first_name,
        last_name,
        is_admin,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE lower(email) = lower($1)
        """,
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
