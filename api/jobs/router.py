"""
Job API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Request, status

from auth import dependencies as auth_dependencies
from core.sql import INT4_MAX

from . import schemas, service

router = APIRouter(prefix="/jobs")

# jobs.id is a Postgres integer.
MAX_JOB_ID = INT4_MAX


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: schemas.JobCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    job = await service.create_job(payload)
    return {"job": job}


@router.get("")
async def list_jobs(request: Request) -> dict:
    """
    Accepted query params: title, minSalary, hasEquity.
    """
    jobs = await service.list_jobs(dict(request.query_params))
    return {"jobs": jobs}


@router.get("/{job_id}")
async def get_job(job_id: int = Path(..., ge=0, le=MAX_JOB_ID)) -> dict:
    job = await service.get_job(job_id)
    return {"job": job}


@router.patch("/{job_id}")
async def update_job(
    payload: schemas.JobUpdate,
    job_id: int = Path(..., ge=0, le=MAX_JOB_ID),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    job = await service.update_job(job_id, payload)
    return {"job": job}


@router.delete("/{job_id}")
async def delete_job(
    job_id: int = Path(..., ge=0, le=MAX_JOB_ID),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    await service.delete_job(job_id)
    return {"deleted": str(job_id)}
