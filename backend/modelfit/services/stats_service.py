"""Admin dashboard statistics, computed on demand on the read path."""

from __future__ import annotations

from datetime import datetime, timedelta

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.config import settings
from modelfit.models.base import utcnow
from modelfit.models.evaluation import Evaluation
from modelfit.models.feedback import Feedback
from modelfit.models.user import User
from modelfit.repositories.evaluations import EvaluationRepository
from modelfit.repositories.feedbacks import FeedbackRepository
from modelfit.repositories.users import UserRepository
from modelfit.schemas.admin import (
    AdminStatsResponse,
    CategoryCountResponse,
    DailyCountResponse,
    StatsOverview,
)
from modelfit.scoring.aggregation import CategoryCount, daily_trend, top_k, trend_window_start, utc_date

logger = structlog.get_logger()


def _categories(counts: list[CategoryCount]) -> list[CategoryCountResponse]:
    return [CategoryCountResponse(value=c.value, count=c.count) for c in counts]


class StatsService:
    def __init__(self, db: AsyncSession) -> None:
        self.users = UserRepository(db)
        self.evaluations = EvaluationRepository(db)
        self.feedbacks = FeedbackRepository(db)

    async def dashboard(self, now: datetime | None = None) -> AdminStatsResponse:
        """Overview counts, top-K models/hardware, feedback mix and daily trend.

        The queries run one after another with no shared snapshot, so the
        numbers may be slightly inconsistent under concurrent writes.
        """
        now = now or utcnow()
        today = utc_date(now)
        recent_since = now - timedelta(days=settings.stats_recent_days)

        overview = StatsOverview(
            total_users=await self.users.count(),
            total_evaluations=await self.evaluations.count(),
            total_feedbacks=await self.feedbacks.count(),
            recent_users=await self.users.count(User.created_at >= recent_since),
            recent_evaluations=await self.evaluations.count(Evaluation.created_at >= recent_since),
        )

        model_rows = await self.evaluations.group_by(Evaluation.model)
        hardware_rows = await self.evaluations.group_by(Evaluation.hardware)
        feedback_rows = await self.feedbacks.group_by(Feedback.type)

        window_start = trend_window_start(settings.stats_trend_days, today)
        timestamps = await self.evaluations.created_since(window_start)
        trend = daily_trend(timestamps, days=settings.stats_trend_days, today=today)

        logger.debug(
            "admin_stats_computed",
            evaluations=overview.total_evaluations,
            trend_rows=len(timestamps),
        )
        return AdminStatsResponse(
            overview=overview,
            model_stats=_categories(top_k(model_rows, settings.stats_top_k)),
            hardware_stats=_categories(top_k(hardware_rows, settings.stats_top_k)),
            feedback_stats=_categories(top_k(feedback_rows, len(feedback_rows))),
            daily_trend=[DailyCountResponse(date=d.date, count=d.count) for d in trend],
        )
