"""
Job business logic.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from core.errors import ConflictError, NotFoundError
from core.sql import CONTAINS, FLAG, MIN, FieldMap, FilterRule, FilterSpec, build_filter, build_update

from . import repository, schemas

logger = logging.getLogger(__name__)

JOB_FIELDS = FieldMap({"companyHandle": "company_handle"})

JOB_FILTERS = FilterSpec(
    resource="job",
    rules=(
        FilterRule("title", "title", CONTAINS),
        FilterRule("minSalary", "salary", MIN),
        # Any value (even "false") turns this on.
        FilterRule("hasEquity", "equity", FLAG),
    ),
)


async def create_job(payload: schemas.JobCreate) -> dict:
    # The same title at the same company counts as a duplicate posting.
    if await repository.find_duplicate(payload.title, payload.companyHandle) is not None:
        raise ConflictError(f"Duplicate job: {payload.title} with {payload.companyHandle}")

    job = await repository.insert_job(
        title=payload.title,
        salary=payload.salary,
        equity=payload.equity,
        company_handle=payload.companyHandle,
    )
    logger.info("job_created id=%s company_handle=%s", job["id"], job["companyHandle"])
    return job


async def list_jobs(params: Mapping[str, Any] | None = None) -> list[dict]:
    if not params:
        return await repository.list_jobs()

    where, values = build_filter(params, JOB_FILTERS)
    logger.debug("job_filter where=%r values=%r", where, values)
    return await repository.list_jobs(where, values)


async def get_job(job_id: int) -> dict:
    job = await repository.get_job(job_id)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")
    return job


async def update_job(job_id: int, payload: schemas.JobUpdate) -> dict:
    set_clause, values = build_update(payload.model_dump(exclude_unset=True), JOB_FIELDS)
    job = await repository.update_job(job_id, set_clause, values)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")
    logger.info("job_updated id=%s fields=%s", job_id, set_clause)
    return job


async def delete_job(job_id: int) -> None:
    row = await repository.delete_job(job_id)
    if row is None:
        raise NotFoundError(f"No job: {job_id}")
    logger.info("job_deleted id=%s", job_id)
