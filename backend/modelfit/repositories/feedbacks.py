from __future__ import annotations

from sqlalchemy.orm import joinedload

from modelfit.models.feedback import Feedback
from modelfit.repositories.base import Repository


class FeedbackRepository(Repository[Feedback]):
    model = Feedback

    async def list_page(self, skip: int, take: int) -> tuple[list[Feedback], int]:
        total = await self.count()
        items = await self.find_many(
            skip=skip,
            take=take,
            order_by=(Feedback.created_at.desc(), Feedback.id.desc()),
            options=(joinedload(Feedback.owner),),
        )
        return items, total
