"""Root conftest — shared test configuration."""

import os

# Tests never touch a real database or a real signing secret
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_FORMAT", "text")
