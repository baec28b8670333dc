"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use; set the environment before any imagix import.
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("AUTH_JWT_SECRET", "imagix-test-secret-0123456789abcdef")
os.environ.setdefault("TABLE_NAME", "imagix_test")
os.environ.setdefault("LOG_FORMAT", "text")
