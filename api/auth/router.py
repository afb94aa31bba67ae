"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import dependencies, schemas, service

router = APIRouter(prefix="/auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.RegisterRequest) -> schemas.RegisterResponse:
    return await service.register(payload)


@router.post("/token")
async def token(payload: schemas.LoginRequest) -> schemas.TokenResponse:
    return await service.login(payload)


@router.get("/me")
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> dict:
    return {"user": service.me(current_user)}
