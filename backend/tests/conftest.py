"""Root conftest — shared test configuration."""

import os

# Tests never touch the real store or log file
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
