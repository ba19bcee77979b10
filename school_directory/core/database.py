from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool
from school_directory.core.config import settings
from school_directory.models.base import Base

# Database URL from settings
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL


def _engine_options(url: str) -> dict:
    """Pool options for the configured backend"""
    if make_url(url).get_backend_name() == "sqlite":
        # SQLite connections are not shared between event loops
        return {"poolclass": NullPool}
    return {
        "pool_pre_ping": True,     # Connection health check
        "pool_size": 20,           # Maximum number of connections in the pool
        "max_overflow": 10,        # Connections allowed beyond pool_size
        "pool_timeout": 30,        # Seconds to wait on connection pool checkout
        "pool_recycle": 1800,      # Recycle connections after 30 minutes
    }


# Create async engine
engine = create_async_engine(
    SQLALCHEMY_DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_options(SQLALCHEMY_DATABASE_URL)
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,    # Don't expire objects after commit
    autoflush=False            # Explicit flush management
)


# FastAPI dependency for database sessions
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async database session.
    Usage: db: AsyncSession = Depends(get_db)
    """
    session = AsyncSessionLocal()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


# Context manager for scripts and tests
@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions outside of request context.
    Usage: async with get_db_context() as session:
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def init_db() -> None:
    """Initialize database tables"""
    import school_directory.models  # noqa: F401  registers models on the metadata
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def reset_db() -> None:
    """Reset database by dropping and recreating all tables"""
    import school_directory.models  # noqa: F401
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_db()


async def close_db() -> None:
    """Close database connections"""
    await engine.dispose()
