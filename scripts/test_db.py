"""Check the database connection and the presence of the engine tables."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env file
from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import inspect
from sqlmodel import SQLModel, text

import app.db.base  # noqa: F401
from app.core.config import settings
from app.db.session import engine, get_session

print("=" * 60)
print("Testing database connection")
print("=" * 60)
print(f"Database: {settings.DATABASE_URL.split('@')[1]}")  # Hide password
print()

try:
    with get_session() as session:
        result = session.exec(text("SELECT version()")).first()
        print("✓ Connection successful!")
        print(f"PostgreSQL version: {result}")

    existing = set(inspect(engine).get_table_names())
    for table in sorted(SQLModel.metadata.tables):
        if table in existing:
            print(f"✓ '{table}' table exists")
        else:
            print(f"✗ '{table}' table does not exist - run migration")

except Exception as e:
    print(f"✗ Connection failed: {e}")
    sys.exit(1)

print("=" * 60)
