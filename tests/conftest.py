"""
Pytest configuration and shared fixtures.

- `client`: FastAPI TestClient (the lifespan is not run, so no DB pool)
- `as_admin` / `as_user`: log the client in by overriding get_current_user
- `store`: in-memory stand-in for the companies/jobs repository modules
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-the-jobboard-suite")

from decimal import Decimal
from typing import Any

import pytest
from fastapi.testclient import TestClient

from auth import dependencies as auth_dependencies
from companies import repository as company_repository
from core.errors import BadRequestError, ConflictError
from jobs import repository as job_repository
from main import app

ADMIN_USER = {"id": 1, "email": "admin@example.com", "isAdmin": True, "isActive": True}
REGULAR_USER = {"id": 2, "email": "u1@example.com", "isAdmin": False, "isActive": True}

COMPANY_COLUMNS = {
    "handle": "handle",
    "name": "name",
    "description": "description",
    "num_employees": "numEmployees",
    "logo_url": "logoUrl",
}
JOB_COLUMNS = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
    "company_handle": "companyHandle",
}


def _apply_set_clause(record: dict, set_clause: str, values: list, columns: dict) -> None:
    for assignment in set_clause.split(", "):
        column, placeholder = assignment.split(" = ")
        record[columns[column]] = values[int(placeholder.lstrip("$")) - 1]


class FakeStore:
    """
    Keeps companies and jobs in dicts and mimics the repository functions.

    Filtered list calls are recorded in `list_calls`; the fake does not
    evaluate SQL predicates and returns every row.
    """

    def __init__(self) -> None:
        self.companies: dict[str, dict[str, Any]] = {}
        self.jobs: dict[int, dict[str, Any]] = {}
        self.list_calls: list[tuple[str, str, list]] = []
        self._next_job_id = 1

    # companies

    async def get_handle(self, handle):
        return {"handle": handle} if handle in self.companies else None

    async def insert_company(self, *, handle, name, description, num_employees, logo_url):
        if handle in self.companies:
            raise ConflictError(f"Duplicate company: {handle}")
        self.companies[handle] = {
            "handle": handle,
            "name": name,
            "description": description,
            "numEmployees": num_employees,
            "logoUrl": logo_url,
        }
        return dict(self.companies[handle])

    async def list_companies(self, where="", values=None):
        self.list_calls.append(("companies", where, list(values or [])))
        return [dict(c) for c in sorted(self.companies.values(), key=lambda c: c["name"])]

    async def get_company_with_jobs(self, handle):
        company = self.companies.get(handle)
        if company is None:
            return []
        jobs = [j for j in self.jobs.values() if j["companyHandle"] == handle]
        if not jobs:
            return [{**company, "job_id": None, "job_title": None, "job_salary": None, "job_equity": None}]
        return [
            {
                **company,
                "job_id": j["id"],
                "job_title": j["title"],
                "job_salary": j["salary"],
                "job_equity": j["equity"],
            }
            for j in sorted(jobs, key=lambda j: j["id"])
        ]

    async def update_company(self, handle, set_clause, values):
        company = self.companies.get(handle)
        if company is None:
            return None
        updated = dict(company)
        _apply_set_clause(updated, set_clause, values, COMPANY_COLUMNS)
        # companies.name is UNIQUE.
        if any(c["name"] == updated["name"] for h, c in self.companies.items() if h != handle):
            raise ConflictError(f"Duplicate company name for: {handle}")
        company.update(updated)
        return dict(company)

    async def delete_company(self, handle):
        if self.companies.pop(handle, None) is None:
            return None
        self.jobs = {k: j for k, j in self.jobs.items() if j["companyHandle"] != handle}
        return {"handle": handle}

    # jobs

    async def find_duplicate(self, title, company_handle):
        for job in self.jobs.values():
            if job["title"] == title and job["companyHandle"] == company_handle:
                return {"id": job["id"]}
        return None

    async def insert_job(self, *, title, salary, equity, company_handle):
        if company_handle not in self.companies:
            raise BadRequestError(f"No company: {company_handle}")
        job_id = self._next_job_id
        self._next_job_id += 1
        self.jobs[job_id] = {
            "id": job_id,
            "title": title,
            "salary": salary,
            "equity": equity,
            "companyHandle": company_handle,
        }
        return dict(self.jobs[job_id])

    async def list_jobs(self, where="", values=None):
        self.list_calls.append(("jobs", where, list(values or [])))
        return [dict(j) for j in sorted(self.jobs.values(), key=lambda j: (j["title"], j["id"]))]

    async def get_job(self, job_id):
        job = self.jobs.get(job_id)
        return dict(job) if job is not None else None

    async def update_job(self, job_id, set_clause, values):
        job = self.jobs.get(job_id)
        if job is None:
            return None
        _apply_set_clause(job, set_clause, values, JOB_COLUMNS)
        return dict(job)

    async def delete_job(self, job_id):
        if self.jobs.pop(job_id, None) is None:
            return None
        return {"id": job_id}


@pytest.fixture
def store(monkeypatch):
    """
    Fresh FakeStore wired into both repository modules, seeded with
    companies c1..c3 and jobs j1..j3 (ids 1..3).
    """
    fake = FakeStore()
    for name in (
        "get_handle",
        "insert_company",
        "list_companies",
        "get_company_with_jobs",
        "update_company",
        "delete_company",
    ):
        monkeypatch.setattr(company_repository, name, getattr(fake, name))
    for name in ("find_duplicate", "insert_job", "list_jobs", "get_job", "update_job", "delete_job"):
        monkeypatch.setattr(job_repository, name, getattr(fake, name))

    fake.companies = {
        "c1": {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"},
        "c2": {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"},
        "c3": {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": None},
    }
    for title, salary, equity, handle in (
        ("j1", 60000, Decimal("0"), "c1"),
        ("j2", 80000, Decimal("0.5"), "c1"),
        ("j3", 100000, Decimal("1"), "c3"),
    ):
        fake.jobs[fake._next_job_id] = {
            "id": fake._next_job_id,
            "title": title,
            "salary": salary,
            "equity": equity,
            "companyHandle": handle,
        }
        fake._next_job_id += 1
    return fake


@pytest.fixture
def client():
    """
    FastAPI test client. Dependency overrides are cleared afterwards.
    """
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def as_admin(client):
    app.dependency_overrides[auth_dependencies.get_current_user] = lambda: dict(ADMIN_USER)
    return client


@pytest.fixture
def as_user(client):
    app.dependency_overrides[auth_dependencies.get_current_user] = lambda: dict(REGULAR_USER)
    return client
