"""
Async engine and session factory for the history store.

Both are created on demand by the service cache and disposed at shutdown;
nothing here runs at import time.

Dependencies: sqlalchemy, caritas.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from caritas.configs.database import DatabaseSettings


def get_async_engine(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Build a pooled asyncpg engine.

    Connections are pinged on checkout so a restarted database does not
    fail the first history write after it.

    Args:
        db_config: PostgreSQL settings

    Returns:
        AsyncEngine: Engine owned by the caller
    """
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Session factory for short-lived units of work.

    Usage:
        async with factory() as session:
            await history_crud.create_entry(session, entry)
            await session.commit()
    """
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
