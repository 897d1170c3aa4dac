"""User repository: lookups by email/mobile and business-scoped listing."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.domain.value_objects import QueryOptions
from eduhub.infrastructure.persistence.models.user import User
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository. Emails are compared lower-cased."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def get_by_mobile(self, mobile: str) -> User | None:
        result = await self.db.execute(select(User).where(User.mobile == mobile))
        return result.scalar_one_or_none()

    async def list_for_business(
        self, business_id: int, options: QueryOptions, role: str | None = None
    ) -> list[User]:
        scope = [User.business_id == business_id]
        if role:
            scope.append(User.role == role)
        return await self.find_many(options, *scope)
