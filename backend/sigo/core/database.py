"""
Async engine and session factory.

SQL statement logging is not configured here: setup_logging() raises the
"sqlalchemy.engine" logger to INFO in development instead of engine echo.
"""
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from sigo.core.config import settings


def is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def build_engine(url: str):
    if not is_sqlite(url):
        return create_async_engine(url, pool_pre_ping=True)

    eng = create_async_engine(url, connect_args={"check_same_thread": False})

    # SQLite leaves foreign keys off unless asked per connection
    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return eng


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    """Request-scoped session; anything left uncommitted after an error is rolled back."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables():
    """Create all tables (local development without migrations)."""
    import sigo.models  # noqa – registers all models
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
