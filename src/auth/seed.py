# src/auth/seed.py
"""Create the initial admin account.

Usage: ``python -m src.auth.seed`` with the ``ADMIN_*`` variables set.
"""
import asyncio
import logging
import sys

from sqlalchemy import select

from src.auth.config import auth_settings
from src.auth.models import User
from src.auth.utils import hash_password, normalize_email
from src.config import settings
from src.database import AsyncSessionLocal
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


class SeedError(Exception):
    pass


async def seed_admin(db) -> bool:
    """Returns True when an admin was created, False when one already exists."""
    required = {
        "ADMIN_EMAIL": auth_settings.ADMIN_EMAIL,
        "ADMIN_PASSWORD": auth_settings.ADMIN_PASSWORD,
        "ADMIN_FIRST_NAME": auth_settings.ADMIN_FIRST_NAME,
        "ADMIN_LAST_NAME": auth_settings.ADMIN_LAST_NAME,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise SeedError(f"Missing environment variables: {', '.join(missing)}")

    email = normalize_email(auth_settings.ADMIN_EMAIL)
    result = await db.execute(
        select(User).where(User.email == email, User.role == "admin")
    )
    if result.scalars().first():
        logger.info("Admin already exists. Skipping seeding.")
        return False

    db.add(
        User(
            first_name=auth_settings.ADMIN_FIRST_NAME.strip(),
            last_name=auth_settings.ADMIN_LAST_NAME.strip(),
            email=email,
            password=hash_password(auth_settings.ADMIN_PASSWORD),
            age=30,
            gender="male",
            role="admin",
        )
    )
    await db.commit()
    logger.info("Admin user (%s) created successfully", email)
    return True


async def main() -> int:
    async with AsyncSessionLocal() as db:
        try:
            await seed_admin(db)
        except SeedError as exc:
            logger.error("Seeding error: %s", exc)
            return 1
    return 0


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    sys.exit(asyncio.run(main()))
