"""Root conftest — shared test configuration."""

import os

# Keep tests off real infrastructure and real secrets
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("JWT_SECRET", "test-signing-secret-at-least-32-bytes")
os.environ.setdefault("LOG_FORMAT", "text")
