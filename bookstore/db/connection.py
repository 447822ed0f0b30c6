"""Asyncpg connection utilities."""
from pathlib import Path
from typing import Optional

import asyncpg

from bookstore.config import settings
from bookstore.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

_pool: Optional[asyncpg.pool.Pool] = None


async def ensure_database_exists() -> None:
    """Create the target database if it doesn't exist."""
    database = settings.database_name
    # Connect to the maintenance database to check/create the target database
    try:
        conn = await asyncpg.connect(
            host=settings.pg_host,
            port=settings.pg_port,
            user=settings.pg_user,
            password=settings.password,
            database="postgres",
            ssl=settings.ssl_mode,
        )
    except (OSError, asyncpg.PostgresError) as e:
        # Users without access to 'postgres' may still reach their own database
        logger.warning(f"Could not check database via 'postgres' ({e}); connecting to {database} directly")
        return

    try:
        exists = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", database)
        if not exists:
            quoted = database.replace('"', '""')
            await conn.execute(f'CREATE DATABASE "{quoted}"')
            logger.info(f"Created database: {database}")
    finally:
        await conn.close()


async def ensure_schema_exists(pool: asyncpg.pool.Pool) -> None:
    """Create the books table if it doesn't exist."""
    await run_migrations(SCHEMA_PATH.read_text(), pool=pool)
    logger.info("Database schema ready")


async def init_db() -> asyncpg.pool.Pool:
    """Initialize database connection pool and ensure database/schema exist."""
    global _pool
    if _pool is None:
        await ensure_database_exists()

        _pool = await asyncpg.create_pool(
            host=settings.pg_host,
            port=settings.pg_port,
            user=settings.pg_user,
            password=settings.password,
            database=settings.database_name,
            min_size=settings.pg_pool_min_size,
            max_size=settings.pg_pool_max_size,
            ssl=settings.ssl_mode,
        )
        logger.info(f"Connection pool created for {settings.pg_host}:{settings.pg_port}/{settings.database_name}")

        await ensure_schema_exists(_pool)

    return _pool


async def get_pool() -> asyncpg.pool.Pool:
    if _pool is None:
        return await init_db()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool:
        await _pool.close()
        _pool = None


async def run_migrations(schema_sql: str, pool: Optional[asyncpg.pool.Pool] = None) -> None:
    pool = pool or await get_pool()
    async with pool.acquire() as conn:
        await conn.execute(schema_sql)
