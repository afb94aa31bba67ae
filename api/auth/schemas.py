"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=8, max_length=72)
    firstName: str | None = Field(default=None, max_length=100)
    lastName: str | None = Field(default=None, max_length=100)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=72)


class UserResponse(BaseModel):
    id: int
    email: str
    firstName: str | None = None
    lastName: str | None = None
    isAdmin: bool = False


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class RegisterResponse(TokenResponse):
    user: UserResponse
