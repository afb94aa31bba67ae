"""
Company API endpoints.

Reads are public; writes require an admin.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/companies")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_company(
    payload: schemas.CompanyCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    company = await service.create_company(payload)
    return {"company": company}


@router.get("")
async def list_companies(request: Request) -> dict:
    """
    List companies, optionally filtered.

    Accepted query params: name (case-insensitive substring), minEmps,
    maxEmps. Anything else is a 400.
    """
    companies = await service.list_companies(dict(request.query_params))
    return {"companies": companies}


@router.get("/{handle}")
async def get_company(handle: str) -> dict:
    company = await service.get_company(handle)
    return {"company": company}


@router.patch("/{handle}")
async def update_company(
    handle: str,
    payload: schemas.CompanyUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    company = await service.update_company(handle, payload)
    return {"company": company}


@router.delete("/{handle}")
async def delete_company(
    handle: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    await service.delete_company(handle)
    return {"deleted": handle}
