import os
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent))

# Default to in-memory SQLite for tests; tables are created per test.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")
os.environ.setdefault("SECRET_KEY", "x" * 32)
os.environ.setdefault("ALLOWED_ORIGINS", "http://example.com")
