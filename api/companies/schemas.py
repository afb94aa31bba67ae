"""
Company API schemas (request models).

Field names are the external (camelCase) ones; `companies.service` maps
them to columns.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.sql import INT4_MAX

HANDLE_PATTERN = r"^[a-z0-9_-]+$"
URL_PATTERN = r"^https?://\S+$"


class CompanyCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    handle: str = Field(..., min_length=1, max_length=25, pattern=HANDLE_PATTERN)
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    numEmployees: int | None = Field(default=None, ge=0, le=INT4_MAX)
    logoUrl: str | None = Field(default=None, max_length=2048, pattern=URL_PATTERN)


class CompanyUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are changed;
    handle is immutable and therefore rejected as an unknown field.
    """

    model_config = ConfigDict(extra="forbid")

    # Defaults are never validated, so an explicit null for a NOT NULL
    # column still fails while omission is allowed.
    name: str = Field(default=None, min_length=1, max_length=200)
    description: str = Field(default=None, max_length=5000)
    numEmployees: int | None = Field(default=None, ge=0, le=INT4_MAX)
    logoUrl: str | None = Field(default=None, max_length=2048, pattern=URL_PATTERN)
