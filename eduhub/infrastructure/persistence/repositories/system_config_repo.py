"""System config repository (key/value upsert)."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.infrastructure.persistence.models.system_config import SystemConfig
from eduhub.infrastructure.persistence.repositories.base import BaseRepository


class SystemConfigRepository(BaseRepository[SystemConfig]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, SystemConfig)

    async def get_value(self, key: str) -> str | None:
        result = await self.db.execute(select(SystemConfig.value).where(SystemConfig.key == key))
        return result.scalar_one_or_none()

    async def upsert(self, key: str, value: str) -> SystemConfig:
        result = await self.db.execute(select(SystemConfig).where(SystemConfig.key == key))
        row = result.scalar_one_or_none()
        if row is None:
            return await self.create(SystemConfig(key=key, value=value))
        return await self.update(row, value=value)
