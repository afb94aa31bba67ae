"""
Job persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import asyncpg

from core import db
from core.errors import BadRequestError
from core.sql import next_placeholder

JOB_COLUMNS = """
  id,
  title,
  salary,
  equity,
  company_handle AS "companyHandle"
"""


async def find_duplicate(title: str, company_handle: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id
        FROM jobs
        WHERE title = $1
          AND company_handle = $2
        LIMIT 1
        """,
        title,
        company_handle,
    )


async def insert_job(
    *,
    title: str,
    salary: int | None,
    equity: Decimal | None,
    company_handle: str,
) -> dict[str, Any]:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}
            """,
            title,
            salary,
            equity,
            company_handle,
        )
    except asyncpg.ForeignKeyViolationError as exc:
        raise BadRequestError(f"No company: {company_handle}") from exc
    if row is None:
        raise RuntimeError("Failed to create job.")
    return row


async def list_jobs(where: str = "", values: list[Any] | None = None) -> list[dict[str, Any]]:
    """
    List jobs ordered by title, then id.

    `where` is a predicate produced by `core.sql.build_filter`.
    """
    where_sql = f"WHERE {where}" if where else ""
    return await db.fetch_all(
        f"""
        SELECT {JOB_COLUMNS}
        FROM jobs
        {where_sql}
        ORDER BY title, id
        """,
        *(values or []),
    )


async def get_job(job_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {JOB_COLUMNS}
        FROM jobs
        WHERE id = $1
        """,
        job_id,
    )


async def update_job(job_id: int, set_clause: str, values: list[Any]) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE jobs
        SET {set_clause}
        WHERE id = {next_placeholder(values)}
        RETURNING {JOB_COLUMNS}
        """,
        *values,
        job_id,
    )


async def delete_job(job_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        DELETE FROM jobs
        WHERE id = $1
        RETURNING id
        """,
        job_id,
    )
