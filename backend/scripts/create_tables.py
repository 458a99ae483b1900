"""Create the profiles and user_roles tables using the sync DATABASE_URL_SYNC.

Usage:
    cd backend
    python scripts/create_tables.py

Convenience helper for local testing. For production use Alembic migrations.
"""
from sqlalchemy import create_engine

from echowrite.core.config import settings
from echowrite.db.base import Base
from echowrite import models  # noqa: F401


def main() -> int:
    url = settings.database_url_sync
    if not url:
        print("DATABASE_URL_SYNC is not set. Check backend/.env")
        return 2

    print(f"Creating tables on {url} ...")
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    print("Done.")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
