"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use; pin them before any app import
os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("TIME_ZONE", "America/Los_Angeles")
