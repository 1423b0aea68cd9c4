"""
Database initialization script.

Creates the engine tables on the configured database.  Production
schemas are managed with Alembic (``alembic upgrade head``); this is the
shortcut for local development.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from app.core.logging import setup_logging
from app.db.init_db import init_db

if __name__ == "__main__":
    setup_logging()
    print("=" * 50)
    print("Training-Load Engine Database Initialization")
    print("=" * 50)

    try:
        init_db()
    except Exception as e:
        print(f"ERROR: Database initialization failed: {e}")
        sys.exit(1)

    print("SUCCESS: Database initialized!")
