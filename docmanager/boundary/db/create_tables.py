"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, docmanager.configs
System role: Database schema initialization

Usage:
    python -m docmanager.boundary.db.create_tables [--reset]
"""

import asyncio
import logging

from docmanager.boundary.db.base import Base
from docmanager.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from docmanager.boundary.db.models.user_model import UserModel  # noqa: F401
from docmanager.boundary.db.models.document_model import DocumentModel  # noqa: F401
from docmanager.boundary.db.models.ingestion_job_model import IngestionJobModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: issues CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables() -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Raises:
        SQLAlchemyError: If database connection fails or drop fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All database tables dropped")


async def reset_tables() -> None:
    """Drop and recreate every table (development only)."""
    await drop_all_tables()
    await create_all_tables()


if __name__ == "__main__":
    import sys

    from docmanager.observability import configure_logging

    configure_logging()
    if "--reset" in sys.argv[1:]:
        asyncio.run(reset_tables())
    else:
        asyncio.run(create_all_tables())
