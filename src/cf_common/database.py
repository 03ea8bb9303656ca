import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings
from src.cf_common.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


def _build_engine() -> AsyncEngine | None:
    if not settings.DATABASE_URL:
        logger.warning(
            "DATABASE_URL is not set — starting without a record store. "
            "Every endpoint that reads or writes records will fail until it is configured."
        )
        return None
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_CONNECT_TIMEOUT_SECONDS,
        pool_recycle=settings.DB_IDLE_TIMEOUT_SECONDS,
        pool_pre_ping=True,
        connect_args={"timeout": settings.DB_CONNECT_TIMEOUT_SECONDS},
    )


engine: AsyncEngine | None = _build_engine()

async_session_factory: async_sessionmaker[AsyncSession] | None = (
    async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    if engine is not None
    else None
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request.

    Raises StoreUnavailableError when the app was started without a store.
    """
    if async_session_factory is None:
        raise StoreUnavailableError()
    async with async_session_factory() as session:
        yield session


async def ping_store() -> bool:
    """Return True if the store answers ``SELECT 1``. Never raises."""
    if engine is None:
        return False
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001 — any failure means "down"
        logger.warning("Record store is unreachable: %s", exc)
        return False
    return True
