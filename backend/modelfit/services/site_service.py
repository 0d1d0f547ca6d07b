"""Announcements, maintenance settings and the public status projection."""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.config import settings
from modelfit.core.exceptions import NotFoundError, ValidationError
from modelfit.models.announcement import Announcement
from modelfit.repositories.announcements import AnnouncementRepository
from modelfit.repositories.site_config import SiteConfigRepository
from modelfit.schemas.site import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
    MaintenanceSettings,
    MaintenanceUpdate,
    StatusResponse,
)

logger = structlog.get_logger()

ANNOUNCEMENT_LIST_LIMIT = 50


class SiteService:
    def __init__(self, db: AsyncSession) -> None:
        self.announcements = AnnouncementRepository(db)
        self.site_config = SiteConfigRepository(db)

    async def list_announcements(self) -> list[Announcement]:
        return await self.announcements.list_recent(take=ANNOUNCEMENT_LIST_LIMIT)

    async def create_announcement(self, payload: AnnouncementCreate) -> Announcement:
        title = (payload.title or "").strip()
        content = (payload.content or "").strip()
        if not title or not content:
            raise ValidationError("title and content are required", code="MISSING_FIELDS")
        announcement = await self.announcements.create(title=title, content=content, active=payload.active)
        logger.info("announcement_created", announcement_id=announcement.id, active=announcement.active)
        return announcement

    async def update_announcement(self, announcement_id: str, payload: AnnouncementUpdate) -> Announcement:
        announcement = await self.announcements.find_by_id(announcement_id)
        if announcement is None:
            raise NotFoundError("Announcement", announcement_id)
        changes = payload.model_dump(exclude_none=True)
        if not changes:
            return announcement
        announcement = await self.announcements.update(announcement, **changes)
        logger.info("announcement_updated", announcement_id=announcement_id, fields=sorted(changes))
        return announcement

    async def maintenance(self) -> MaintenanceSettings:
        config = await self.site_config.get()
        if config is None:
            return MaintenanceSettings(maintenance=False, maintenance_message="")
        return MaintenanceSettings(
            maintenance=config.maintenance,
            maintenance_message=config.maintenance_message or "",
        )

    async def update_maintenance(self, payload: MaintenanceUpdate) -> MaintenanceSettings:
        config = await self.site_config.upsert(payload.maintenance, payload.maintenance_message)
        logger.warning("maintenance_mode_updated", maintenance=config.maintenance)
        return MaintenanceSettings(
            maintenance=config.maintenance,
            maintenance_message=config.maintenance_message or "",
        )

    async def status(self) -> StatusResponse:
        maintenance = await self.maintenance()
        history = await self.announcements.list_recent(
            take=settings.announcement_history_limit,
            active_only=True,
        )
        items = [AnnouncementResponse.model_validate(a) for a in history]
        return StatusResponse(
            maintenance=maintenance.maintenance,
            maintenance_message=maintenance.maintenance_message,
            latest_announcement=items[0] if items else None,
            announcement_history=items,
        )
