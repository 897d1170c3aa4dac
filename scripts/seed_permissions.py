"""Seed permission definitions and, optionally, the first SUPERADMIN account.

Usage:
    python -m scripts.seed_permissions
Set SUPERADMIN_EMAIL and SUPERADMIN_PASSWORD (and optionally SUPERADMIN_NAME)
to also create a SUPERADMIN user when none with that email exists.
Requires Postgres with migrations applied (alembic upgrade head).
"""

import asyncio
import os
import sys

from eduhub.application.services.permission_service import SEEDED_PERMISSIONS
from eduhub.core.config import get_settings
from eduhub.domain.enums import UserRole, UserStatus
from eduhub.infrastructure.persistence import database
from eduhub.infrastructure.persistence.models import User
from eduhub.infrastructure.persistence.repositories import (
    PermissionRepository,
    UserRepository,
)
from eduhub.infrastructure.security.password import hash_password
from eduhub.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def _bootstrap_superadmin(users: UserRepository) -> None:
    email = os.environ.get("SUPERADMIN_EMAIL", "").strip().lower()
    password = os.environ.get("SUPERADMIN_PASSWORD", "")
    if not email or not password:
        return
    if await users.get_by_email(email) is not None:
        logger.info("SUPERADMIN %s already exists", email)
        return
    user = await users.create(
        User(
            name=os.environ.get("SUPERADMIN_NAME", "Super Admin"),
            email=email,
            password_hash=await hash_password(password),
            role=UserRole.SUPERADMIN.value,
            status=UserStatus.ACTIVE.value,
        )
    )
    print(f"Created SUPERADMIN user {user.id} ({email})")


async def main() -> None:
    """Insert missing permission codes and bootstrap the SUPERADMIN."""
    get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL is not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            added = await PermissionRepository(session).ensure_codes(SEEDED_PERMISSIONS)
            print(f"Seeded {added} new permission(s), {len(SEEDED_PERMISSIONS)} defined")
            await _bootstrap_superadmin(UserRepository(session))
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
