"""
Typed failures raised by the SQL builders and resource services.

These are independent of FastAPI; `main.py` registers a single handler that
turns them into JSON responses using `status_code`.
"""

from __future__ import annotations


class AppError(RuntimeError):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Malformed or disallowed input (empty update, unknown filter, min > max)."""

    status_code = 400


class NotFoundError(AppError):
    """The addressed company/job does not exist."""

    status_code = 404


class ConflictError(AppError):
    """An entity with the same identity already exists."""

    status_code = 409
