from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.config import settings
from app.core.exceptions import AppError
import logging
from sqlalchemy import event

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine, with pooling options suited to the backend."""
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.log_level == "DEBUG",
        )

    async_engine = create_async_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        echo=settings.log_level == "DEBUG",
        future=True
    )

    # Set search_path to the schema from settings after connecting
    @event.listens_for(async_engine.sync_engine, "connect")
    def set_search_path(dbapi_connection, connection_record):
        logger.info("Setting search path to %s", settings.db_schema)
        cursor = dbapi_connection.cursor()
        cursor.execute(f"SET search_path TO {settings.db_schema}")
        cursor.close()

    return async_engine


engine: AsyncEngine = build_engine(settings.database_url)

async_session_maker = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_session() -> AsyncSession:
    """FastAPI dependency for getting database session"""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            if not isinstance(e, AppError):
                logger.error(f"Database session error: {type(e).__name__}: {e}")
            raise
        finally:
            await session.close()


async def create_db_and_tables():
    # Register every table on SQLModel.metadata
    import app.models  # noqa: F401

    logger.info("Creating database tables")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db():
    await engine.dispose()
