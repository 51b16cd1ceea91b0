"""
Default administrator seed script.

Creates the administrator account configured by SEED_ADMIN_* settings when
no user with that email exists. Safe to run repeatedly.

Dependencies: sqlalchemy, docmanager.configs, docmanager.core.security
System role: Bootstrap data for fresh deployments

Usage:
    python -m docmanager.boundary.db.seed
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docmanager.boundary.db.CRUD.user_crud import user_crud
from docmanager.boundary.db.connection import get_async_session_factory
from docmanager.boundary.db.create_tables import create_all_tables
from docmanager.boundary.db.models.user_model import UserModel
from docmanager.configs import get_settings
from docmanager.core.roles import UserRole
from docmanager.core.security import hash_password

logger = logging.getLogger(__name__)


async def seed_admin(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> UserModel:
    """
    Ensure the default administrator exists.

    Args:
        session_factory: Session factory (defaults to the configured database)

    Returns:
        UserModel: Existing or newly created admin user
    """
    settings = get_settings()
    seed = settings.seed
    factory = session_factory or get_async_session_factory()

    async with factory() as session:
        existing = await user_crud.get_by_email(session, seed.email)
        if existing is not None:
            logger.info("Admin user already exists", extra={"email": seed.email})
            return existing

        admin = await user_crud.create(
            session,
            email=seed.email,
            password_hash=hash_password(
                seed.password, settings.auth.password_hash_rounds
            ),
            first_name=seed.first_name,
            last_name=seed.last_name,
            role=UserRole.ADMIN,
            is_active=True,
        )
        await session.commit()
        logger.info("Admin user created", extra={"email": seed.email, "user_id": str(admin.id)})
        return admin


async def main() -> None:
    await create_all_tables()
    await seed_admin()


if __name__ == "__main__":
    from docmanager.observability import configure_logging

    configure_logging()
    asyncio.run(main())
