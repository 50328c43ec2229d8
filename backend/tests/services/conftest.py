"""Service test fixtures — async DB, fake downstream services, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - ACH/ledger clients and the idempotency recorder overridden with per-test instances
    - db_manager patched so the readiness check sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for repository and route tests
    - Fakes injected through dependency_overrides: routes never see app.state in tests
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import paygate.models  # noqa: F401
from paygate.api.deps import get_ach_client, get_idempotency_recorder, get_ledger_client
from paygate.db.base import Base
from paygate.infrastructure.database import get_db, DatabaseSessionManager
from paygate.infrastructure.idempotency import IdempotencyRecorder
import paygate.infrastructure.database as db_module
from paygate.main import app
from paygate.services.party_repositories import (
    SQLCustomerRepository,
    SQLDepositoryRepository,
    SQLOriginatorRepository,
)
from tests.factories import USER_ID, make_parties
from tests.services.fake_downstream import FakeAchClient, FakeLedgerClient


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_ach():
    return FakeAchClient()


@pytest.fixture
def fake_ledger():
    return FakeLedgerClient()


@pytest.fixture
def recorder():
    return IdempotencyRecorder(ttl_seconds=3600)


@pytest.fixture
async def seeded_parties(test_db):
    """Insert a verified customer, originator and both depositories for USER_ID."""
    parties = make_parties()
    await SQLCustomerRepository(test_db).add(USER_ID, parties.customer)
    await SQLOriginatorRepository(test_db).add(USER_ID, parties.originator)
    depositories = SQLDepositoryRepository(test_db)
    await depositories.add(USER_ID, parties.customer_depository)
    await depositories.add(USER_ID, parties.originator_depository)
    await test_db.commit()
    return parties


@pytest.fixture
async def client(test_engine, test_session_factory, fake_ach, fake_ledger, recorder):
    """FastAPI test client with DB and downstream dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ach_client] = lambda: fake_ach
    app.dependency_overrides[get_ledger_client] = lambda: fake_ledger
    app.dependency_overrides[get_idempotency_recorder] = lambda: recorder

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
        headers={"X-User-Id": USER_ID},
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
