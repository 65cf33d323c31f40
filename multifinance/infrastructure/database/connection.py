"""Database connection and session management."""

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from multifinance.core.config import settings


def normalize_database_url(url: str) -> str:
    """Rewrite plain driver URLs to their async driver equivalents."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def configure_sqlite_engine(engine: AsyncEngine) -> None:
    """
    Make SQLite transactions safe for concurrent writers.

    pysqlite defers BEGIN until the first write, so two sessions can read
    the same limit row and both deduct from it. Opening every transaction
    with BEGIN IMMEDIATE takes the database write lock up front, which
    serializes writers the way SELECT ... FOR UPDATE does on PostgreSQL.
    Foreign keys are off by default in SQLite and are enabled here.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Disable the driver's own transaction handling; "begin" below owns it
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create the async engine for a database URL.

    Args:
        database_url: Optional override for the database URL
    """
    url = normalize_database_url(database_url or settings.database_url)

    if make_url(url).get_backend_name() == "sqlite":
        engine = create_async_engine(url, echo=settings.debug)
        configure_sqlite_engine(engine)
        return engine

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
    )


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used by units of work and stores."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


class DatabaseSessionManager:
    """
    Manages the database engine and session factory.

    Uses SQLAlchemy async engine for non-blocking database operations.
    """

    def __init__(self):
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    def init(self, database_url: str | None = None):
        """
        Initialize the database engine and session factory.

        Args:
            database_url: Optional override for the database URL
        """
        self._engine = create_engine(database_url)
        self._sessionmaker = create_sessionmaker(self._engine)

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        if self._sessionmaker is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._sessionmaker

    async def close(self):
        """Close the database engine."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None


db_manager = DatabaseSessionManager()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    FastAPI dependency for the session factory.

    Returns:
        The initialized async session factory
    """
    return db_manager.sessionmaker
