from __future__ import annotations

from sqlalchemy import select

from modelfit.models.site_config import SITE_CONFIG_KEY, SiteConfig
from modelfit.repositories.base import Repository


class SiteConfigRepository(Repository[SiteConfig]):
    model = SiteConfig

    async def get(self) -> SiteConfig | None:
        result = await self.db.execute(select(SiteConfig).where(SiteConfig.key == SITE_CONFIG_KEY))
        return result.scalar_one_or_none()

    async def upsert(self, maintenance: bool, maintenance_message: str | None) -> SiteConfig:
        config = await self.get()
        if config is None:
            return await self.create(
                key=SITE_CONFIG_KEY,
                maintenance=maintenance,
                maintenance_message=maintenance_message,
            )
        return await self.update(
            config,
            maintenance=maintenance,
            maintenance_message=maintenance_message,
        )
