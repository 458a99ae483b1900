from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from echowrite.core.config import settings


def engine_args(raw_url: str) -> tuple[URL, dict]:
    """Split a libpq-style `sslmode` off the URL into asyncpg connect args.

    Supabase connection strings end with `?sslmode=require`, which asyncpg
    rejects as an unknown keyword; it takes `ssl=` instead.
    """
    url = make_url(raw_url)
    sslmode = url.query.get("sslmode")
    if sslmode is None:
        return url, {}
    url = url.difference_update_query(["sslmode"])
    if url.get_backend_name() == "postgresql" and sslmode != "disable":
        return url, {"ssl": sslmode}
    return url, {}


def get_engine(url: str | None = None):
    db_url, connect_args = engine_args(url or settings.database_url)
    return create_async_engine(db_url, echo=False, pool_pre_ping=True, connect_args=connect_args)


def get_sessionmaker(engine=None):
    if engine is None:
        engine = get_engine()
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine = get_engine()
SessionLocal = get_sessionmaker(engine)


async def get_db():
    async with SessionLocal() as session:
        yield session
