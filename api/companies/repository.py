"""
Company persistence (raw SQL).

Columns are aliased to the external field names in every SELECT/RETURNING,
so rows come back ready to serialize.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db
from core.errors import ConflictError
from core.sql import next_placeholder

COMPANY_COLUMNS = """
  handle,
  name,
  description,
  num_employees AS "numEmployees",
  logo_url AS "logoUrl"
"""


async def get_handle(handle: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT handle
        FROM companies
        WHERE handle = $1
        """,
        handle,
    )


async def insert_company(
    *,
    handle: str,
    name: str,
    description: str,
    num_employees: int | None,
    logo_url: str | None,
) -> dict[str, Any]:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}
            """,
            handle,
            name,
            description,
            num_employees,
            logo_url,
        )
    except asyncpg.UniqueViolationError as exc:
        # Lost a race with another insert, or the name is taken.
        raise ConflictError(f"Duplicate company: {handle}") from exc
    if row is None:
        raise RuntimeError("Failed to create company.")
    return row


async def list_companies(where: str = "", values: list[Any] | None = None) -> list[dict[str, Any]]:
    """
    List companies ordered by name.

    `where` is a predicate produced by `core.sql.build_filter` whose
    placeholders refer to `values`.
    """
    where_sql = f"WHERE {where}" if where else ""
    return await db.fetch_all(
        f"""
        SELECT {COMPANY_COLUMNS}
        FROM companies
        {where_sql}
        ORDER BY name
        """,
        *(values or []),
    )


async def get_company_with_jobs(handle: str) -> list[dict[str, Any]]:
    """
    One row per job of the company (one row with NULL job columns if it has
    none). Empty list when the company does not exist.
    """
    return await db.fetch_all(
        """
        SELECT c.handle,
               c.name,
               c.description,
               c.num_employees AS "numEmployees",
               c.logo_url AS "logoUrl",
               j.id AS job_id,
               j.title AS job_title,
               j.salary AS job_salary,
               j.equity AS job_equity
        FROM companies c
        LEFT JOIN jobs j ON j.company_handle = c.handle
        WHERE c.handle = $1
        ORDER BY j.id
        """,
        handle,
    )


async def update_company(handle: str, set_clause: str, values: list[Any]) -> dict[str, Any] | None:
    """
    Apply a SET clause from `core.sql.build_update`. None when no such handle.
    """
    try:
        return await db.fetch_one(
            f"""
            UPDATE companies
            SET {set_clause}
            WHERE handle = {next_placeholder(values)}
            RETURNING {COMPANY_COLUMNS}
            """,
            *values,
            handle,
        )
    except asyncpg.UniqueViolationError as exc:
        # The new name belongs to another company.
        raise ConflictError(f"Duplicate company name for: {handle}") from exc


async def delete_company(handle: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        DELETE FROM companies
        WHERE handle = $1
        RETURNING handle
        """,
        handle,
    )
