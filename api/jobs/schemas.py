"""
Job API schemas (request models).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from companies.schemas import HANDLE_PATTERN
from core.sql import INT4_MAX


class JobCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=200)
    salary: int | None = Field(default=None, ge=0, le=INT4_MAX)
    equity: Decimal | None = Field(default=None, ge=0, le=1)
    companyHandle: str = Field(..., min_length=1, max_length=25, pattern=HANDLE_PATTERN)


class JobUpdate(BaseModel):
    """
    Partial update. id and companyHandle cannot change.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(default=None, min_length=1, max_length=200)
    salary: int | None = Field(default=None, ge=0, le=INT4_MAX)
    equity: Decimal | None = Field(default=None, ge=0, le=1)
