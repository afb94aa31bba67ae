"""
Environment-driven configuration.

Values are read on each call so tests can flip them with monkeypatch.
Put new knobs here as small accessor functions rather than module constants.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_JWT_SECRET = "dev-change-this-secret"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def app_env() -> str:
    return _env_str("APP_ENV", "development").lower()


def is_test() -> bool:
    return app_env() == "test"


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's sslmode query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    """
    Postgres DSN for the current environment.

    APP_ENV=test selects DATABASE_TEST_URL so the test suite never touches
    the development database.
    """
    name = "DATABASE_TEST_URL" if is_test() else "DATABASE_URL"
    url = os.environ.get(name, "").strip()
    if not url:
        raise RuntimeError(f"{name} is not set.")
    return _sanitize_database_url(url)


def jwt_secret() -> str:
    # In production, set JWT_SECRET in environment.
    return _env_str("JWT_SECRET", DEFAULT_JWT_SECRET)


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def bcrypt_work_factor() -> int:
    # bcrypt's floor is 4 rounds; hashing speed is not under test.
    if is_test():
        return 4
    return max(4, _env_int("BCRYPT_WORK_FACTOR", 12))


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
