#!/usr/bin/env python3
"""
Database connectivity check.

Runs the same initialize/close sequence as application startup and
shutdown, prints the pool status, and exits non-zero on failure. Useful
as a container readiness probe or before running the server.

Usage:
    python scripts/check_db.py            - Check the configured database
    python scripts/check_db.py <url>      - Check an explicit SQLAlchemy URL
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config import settings
from database import DatabaseError, close_db, get_db_info, init_db, sanitize_db_url


def check(dsn=None) -> int:
    """
    Initialize, report and close the shared database connection.

    Returns:
        Process exit code (0 on success)
    """
    target = dsn if dsn is not None else settings.database_url
    print(f"Checking database: {sanitize_db_url(target)}")

    try:
        init_db(target)
    except DatabaseError as e:
        print(f"✗ {type(e).__name__}: {e}")
        return 1

    try:
        info = get_db_info()
        print(f"✓ Database {info['status']}")
        for key, value in info.get("pool", {}).items():
            print(f"  {key}: {value}")
    finally:
        try:
            close_db()
        except DatabaseError as e:
            print(f"✗ {type(e).__name__}: {e}")
            return 1

    return 0


def main() -> int:
    """Main CLI entrypoint."""
    if len(sys.argv) > 2:
        print("Usage: python scripts/check_db.py [url]")
        return 2
    return check(sys.argv[1] if len(sys.argv) == 2 else None)


if __name__ == "__main__":
    sys.exit(main())
