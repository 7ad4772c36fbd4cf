from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.utils.settings.database import DatabaseSettings


def configure_sqlite_locking(engine: AsyncEngine) -> None:
    """Open every SQLite transaction with BEGIN IMMEDIATE.

    SQLite has no row locks, so the database write lock stands in for
    ``SELECT ... FOR UPDATE``: one unit of work at a time, the rest wait on
    the busy timeout.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Hand transaction control to SQLAlchemy instead of the driver
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine_from_url(url: str, echo: bool = False) -> AsyncEngine:
    """Build an async engine, applying SQLite locking when needed."""
    if url.startswith("sqlite"):
        engine = create_async_engine(
            url, echo=echo, connect_args={"timeout": 30}
        )
        configure_sqlite_locking(engine)
        return engine

    return create_async_engine(url, echo=echo, pool_pre_ping=True, pool_recycle=300)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


_settings = DatabaseSettings()
async_engine = create_engine_from_url(
    _settings.DATABASE_URL_ASYNC, echo=_settings.DATABASE_ECHO
)
AsyncSessionLocal = create_session_factory(async_engine)

