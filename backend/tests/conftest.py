import os

# Test-safe environment defaults for pydantic Settings (must run before importing echowrite)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["SUPABASE_JWT_SECRET"] = "test-secret"
os.environ.setdefault("AI_GATEWAY_API_KEY", "test-gateway-key")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from echowrite.db.base import Base
from echowrite.db.session import get_engine, get_sessionmaker, get_db
from echowrite.main import app
from echowrite.services.ai_relay import get_ai_relay
from tests.helpers import FakeRelay, async_override_get_db_factory


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "echowrite-test.db"


@pytest.fixture()
def sync_engine(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(sync_engine):
    """Sync session for seeding and inspecting the ledger around HTTP calls."""
    with Session(sync_engine, expire_on_commit=False) as s:
        yield s


@pytest.fixture()
def fake_relay():
    return FakeRelay()


@pytest.fixture()
def client(db_path, sync_engine, fake_relay):
    async_engine = get_engine(f"sqlite+aiosqlite:///{db_path}")
    app.dependency_overrides[get_db] = async_override_get_db_factory(get_sessionmaker(async_engine))
    app.dependency_overrides[get_ai_relay] = lambda: fake_relay

    with TestClient(app) as c:
        yield c
        c.portal.call(async_engine.dispose)

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def async_maker(db_path, sync_engine):
    async_engine = get_engine(f"sqlite+aiosqlite:///{db_path}")
    yield get_sessionmaker(async_engine)
    await async_engine.dispose()
