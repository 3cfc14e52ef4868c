"""
Shared pytest fixtures for SIGO backend tests.

Uses SQLite in-memory with StaticPool so all sessions share one connection,
meaning data written in one session is visible to others (important for HTTP client tests).
"""
from datetime import date

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

import sigo.models  # noqa – registers all SQLAlchemy models with Base.metadata
from sigo.core.database import Base, get_db
from sigo.main import app
from sigo.models.leave import Leave
from sigo.models.person import Person
from sigo.models.restriction import Restriction

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_USER = "SGT TESTE"


# ── Shared engine (function-scoped: fresh DB per test) ───────────────────────

@pytest_asyncio.fixture
async def engine():
    """Creates a fresh in-memory SQLite engine per test with a shared connection pool."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,          # single shared connection → all sessions see same data
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine) -> AsyncSession:
    """Async DB session for direct data inspection inside tests."""
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


# ── HTTP client fixture ───────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def client(engine) -> AsyncClient:
    """
    FastAPI test client with get_db overridden to use the test engine.
    Each request gets its own session but shares the same underlying
    connection via StaticPool.
    """
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-User": TEST_USER},
    ) as c:
        yield c

    app.dependency_overrides.clear()


# ── Personnel fixtures ────────────────────────────────────────────────────────

async def create_person(db, re: str = "123456", war_name: str = "PEREIRA", rank: str = "CB", **kwargs) -> Person:
    """Auxiliar: policial gravado direto no banco, sem passar pela API."""
    person = Person(
        re=re,
        check_digit="7",
        full_name=kwargs.pop("full_name", f"FULANO {war_name}"),
        war_name=war_name,
        rank=rank,
        **kwargs,
    )
    db.add(person)
    await db.commit()
    await db.refresh(person)
    return person


async def create_leave(db, person, start: date, end: date | None, type: str = "FERIAS", **kwargs) -> Leave:
    leave = Leave(
        person_id=person.id,
        type=type,
        start_date=start,
        end_date=end,
        **kwargs,
    )
    db.add(leave)
    await db.commit()
    await db.refresh(leave)
    return leave


async def create_restriction(db, person, codes: list[str], start: date, end: date, **kwargs) -> Restriction:
    restriction = Restriction(
        person_id=person.id,
        codes=codes,
        has_critical=kwargs.pop("has_critical", False),
        start_date=start,
        end_date=end,
        document=kwargs.pop("document", "Ata JS 01"),
        **kwargs,
    )
    db.add(restriction)
    await db.commit()
    await db.refresh(restriction)
    return restriction


@pytest_asyncio.fixture
async def person(db) -> Person:
    return await create_person(db)
