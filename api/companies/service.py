"""
Company business logic.

Scope:
- duplicate / not-found semantics on top of the SQL in `repository`
- query-string filters and partial updates via `core.sql`
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from core.errors import ConflictError, NotFoundError
from core.sql import CONTAINS, MAX, MIN, FieldMap, FilterRule, FilterSpec, build_filter, build_update

from . import repository, schemas

logger = logging.getLogger(__name__)

COMPANY_FIELDS = FieldMap(
    {
        "numEmployees": "num_employees",
        "logoUrl": "logo_url",
    }
)

COMPANY_FILTERS = FilterSpec(
    resource="company",
    rules=(
        FilterRule("name", "name", CONTAINS),
        FilterRule("minEmps", "num_employees", MIN),
        FilterRule("maxEmps", "num_employees", MAX),
    ),
)


def _nest_jobs(rows: list[dict[str, Any]]) -> dict[str, Any]:
    first = rows[0]
    company = {
        "handle": first["handle"],
        "name": first["name"],
        "description": first["description"],
        "numEmployees": first["numEmployees"],
        "logoUrl": first["logoUrl"],
    }
    jobs = [
        {
            "id": row["job_id"],
            "title": row["job_title"],
            "salary": row["job_salary"],
            "equity": row["job_equity"],
        }
        for row in rows
        if row["job_id"] is not None
    ]
    # `jobs` is only present when the company has at least one.
    if jobs:
        company["jobs"] = jobs
    return company


async def create_company(payload: schemas.CompanyCreate) -> dict:
    if await repository.get_handle(payload.handle) is not None:
        raise ConflictError(f"Duplicate company: {payload.handle}")

    company = await repository.insert_company(
        handle=payload.handle,
        name=payload.name,
        description=payload.description,
        num_employees=payload.numEmployees,
        logo_url=payload.logoUrl,
    )
    logger.info("company_created handle=%s", company["handle"])
    return company


async def list_companies(params: Mapping[str, Any] | None = None) -> list[dict]:
    """
    All companies, or those matching name / minEmps / maxEmps.
    """
    if not params:
        return await repository.list_companies()

    where, values = build_filter(params, COMPANY_FILTERS)
    logger.debug("company_filter where=%r values=%r", where, values)
    return await repository.list_companies(where, values)


async def get_company(handle: str) -> dict:
    rows = await repository.get_company_with_jobs(handle)
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    return _nest_jobs(rows)


async def update_company(handle: str, payload: schemas.CompanyUpdate) -> dict:
    set_clause, values = build_update(payload.model_dump(exclude_unset=True), COMPANY_FIELDS)
    company = await repository.update_company(handle, set_clause, values)
    if company is None:
        raise NotFoundError(f"No company: {handle}")
    logger.info("company_updated handle=%s fields=%s", handle, set_clause)
    return company


async def delete_company(handle: str) -> None:
    row = await repository.delete_company(handle)
    if row is None:
        raise NotFoundError(f"No company: {handle}")
    logger.info("company_deleted handle=%s", handle)
