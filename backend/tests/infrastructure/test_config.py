"""Settings — environment parsing."""

import pytest
from pydantic import ValidationError

from devconnect.config import Settings


def test_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    assert Settings().cors_origins == ["http://a.test", "http://b.test"]


def test_cors_origins_from_json_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", '["http://a.test"]')
    assert Settings().cors_origins == ["http://a.test"]


def test_signing_key_is_required(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None)
    assert [e["loc"] for e in exc_info.value.errors()] == [("jwt_secret",)]


def test_signing_key_from_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "x" * 32)
    assert Settings(_env_file=None).jwt_secret == "x" * 32


@pytest.mark.parametrize("field,value", [
    ("jwt_secret", ""),
    ("jwt_secret", "too-short-for-hmac"),
    ("bcrypt_rounds", 3),
    ("auth_token_expire_seconds", 0),
    ("log_format", "xml"),
])
def test_rejects_bad_values(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})
