from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, func, or_, select

from modelfit.models.evaluation import Evaluation
from modelfit.models.feedback import Feedback
from modelfit.models.user import User
from modelfit.repositories.base import Repository
from modelfit.schemas.common import ADMIN_ROLES


class UserRepository(Repository[User]):
    model = User

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_phone(self, phone: str) -> User | None:
        result = await self.db.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()

    async def find_by_identifier(self, identifier: str) -> User | None:
        """Look up by email or phone, whichever matches first."""
        result = await self.db.execute(
            select(User)
            .where(or_(User.email == identifier, User.phone == identifier))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_with_counts(
        self,
        *filters: ColumnElement[bool],
        skip: int = 0,
        take: int = 10,
        order_by: Sequence[Any] = (),
    ) -> list[tuple[User, int, int]]:
        """Users with their evaluation and feedback counts."""
        eval_counts = (
            select(Evaluation.user_id, func.count(Evaluation.id).label("n"))
            .group_by(Evaluation.user_id)
            .subquery()
        )
        feedback_counts = (
            select(Feedback.user_id, func.count(Feedback.id).label("n"))
            .group_by(Feedback.user_id)
            .subquery()
        )
        query = (
            select(
                User,
                func.coalesce(eval_counts.c.n, 0),
                func.coalesce(feedback_counts.c.n, 0),
            )
            .outerjoin(eval_counts, eval_counts.c.user_id == User.id)
            .outerjoin(feedback_counts, feedback_counts.c.user_id == User.id)
            .where(*filters)
            .order_by(*(order_by or (User.created_at.desc(), User.id.desc())))
            .offset(skip)
            .limit(take)
        )
        result = await self.db.execute(query)
        return [(user, int(evals), int(feedbacks)) for user, evals, feedbacks in result.all()]

    async def list_admins(self) -> list[tuple[User, int, int]]:
        # super_admin sorts after admin alphabetically, so descending puts it first
        return await self.list_with_counts(
            User.role.in_(ADMIN_ROLES),
            take=1000,
            order_by=(User.role.desc(), User.created_at.desc(), User.id.desc()),
        )
