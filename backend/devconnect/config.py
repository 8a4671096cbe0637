"""Configuration — DevConnect settings read from the environment (and .env).

Invariants:
    - The token signing key, its algorithm and the token lifetime come only
      from here; TokenService receives them, never reads env vars itself
    - get_settings() is cached (lru_cache): one Settings per process
    - bcrypt_rounds stays inside bcrypt's accepted cost range (4..31)

Design Decisions:
    - JWT_SECRET has no default: startup fails without a real signing key
    - Working defaults for everything else (docker-compose Postgres, CORS, logging)
    - CORS_ORIGINS accepts a JSON list or a comma-separated string
"""

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://devconnect:devconnect@db:5432/devconnect"
    )
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Tokens
    jwt_secret: str = Field(min_length=32)
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    auth_token_expire_seconds: int = Field(360_000, gt=0)

    # Passwords
    bcrypt_rounds: int = Field(10, ge=4, le=31)

    # API
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// URLs; the engine needs +asyncpg."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if not isinstance(v, str):
            return v
        if v.lstrip().startswith("["):
            return json.loads(v)
        return [origin.strip() for origin in v.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
