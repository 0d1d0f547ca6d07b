from __future__ import annotations

from modelfit.models.announcement import Announcement
from modelfit.repositories.base import Repository


class AnnouncementRepository(Repository[Announcement]):
    model = Announcement

    async def list_recent(self, take: int, active_only: bool = False) -> list[Announcement]:
        """Most recently updated first; the head of the list is the "latest"."""
        filters = [Announcement.active.is_(True)] if active_only else []
        return await self.find_many(
            *filters,
            take=take,
            order_by=(Announcement.updated_at.desc(), Announcement.id.desc()),
        )
