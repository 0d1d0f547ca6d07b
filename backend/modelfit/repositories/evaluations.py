from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from modelfit.models.base import utcnow
from modelfit.models.evaluation import Evaluation
from modelfit.repositories.base import Repository


class EvaluationRepository(Repository[Evaluation]):
    model = Evaluation

    async def find_with_owner(self, evaluation_id: str) -> Evaluation | None:
        result = await self.db.execute(
            select(Evaluation)
            .options(joinedload(Evaluation.owner))
            .where(Evaluation.id == evaluation_id)
        )
        return result.scalar_one_or_none()

    async def find_for_owner(self, user_id: str, take: int) -> list[Evaluation]:
        return await self.find_many(
            Evaluation.user_id == user_id,
            take=take,
            order_by=(Evaluation.created_at.desc(), Evaluation.id.desc()),
        )

    async def list_page(
        self,
        skip: int,
        take: int,
        include_archived: bool = False,
    ) -> tuple[list[Evaluation], int]:
        """One page of records plus the total.

        The count and the page are separate queries; under concurrent writes
        they may disagree.
        """
        filters = [] if include_archived else [Evaluation.archived.is_(False)]
        total = await self.count(*filters)
        items = await self.find_many(
            *filters,
            skip=skip,
            take=take,
            order_by=(Evaluation.created_at.desc(), Evaluation.id.desc()),
            options=(joinedload(Evaluation.owner),),
        )
        return items, total

    async def created_since(self, since: datetime) -> list[datetime]:
        result = await self.db.execute(
            select(Evaluation.created_at).where(Evaluation.created_at >= since)
        )
        return list(result.scalars().all())

    async def set_archived(self, evaluation: Evaluation, archived: bool) -> Evaluation:
        return await self.update(
            evaluation,
            archived=archived,
            archived_at=utcnow() if archived else None,
        )
