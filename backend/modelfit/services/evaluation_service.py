"""Evaluation records: submission, owner reads, history and admin views.

Scored payloads arrive from the external scoring engine as JSON objects and
are stored as JSON text. Every read goes through the score aggregator, which
parses them best-effort.
"""

from __future__ import annotations

import json
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.config import settings
from modelfit.core.access import Caller
from modelfit.core.exceptions import NotFoundError
from modelfit.models.evaluation import Evaluation
from modelfit.repositories.evaluations import EvaluationRepository
from modelfit.schemas.admin import (
    AdminEvaluationDetail,
    AdminEvaluationItem,
    AdminEvaluationListResponse,
    ArchiveResponse,
)
from modelfit.schemas.common import Pagination, PaginationParams
from modelfit.schemas.evaluation import (
    EvaluationCreate,
    EvaluationDetail,
    EvaluationSummary,
    HistoryItem,
    ScoreSummary,
)
from modelfit.scoring.aggregation import overall_score, score_record
from modelfit.scoring.payloads import Dimension, OpaquePayload, load_json, parse_payload

logger = structlog.get_logger()


def score_summary(evaluation: Evaluation) -> ScoreSummary:
    scores = score_record(
        evaluation.resource_feasibility,
        evaluation.technical_feasibility,
        evaluation.business_value,
    )
    return ScoreSummary(
        resource=scores.resource,
        technical=scores.technical,
        business=scores.business,
        overall=scores.overall,
    )


def data_types_of(evaluation: Evaluation) -> list[str]:
    decoded = load_json(evaluation.business_data_types)
    if not isinstance(decoded, list):
        return []
    return [str(item) for item in decoded]


def to_summary(evaluation: Evaluation) -> EvaluationSummary:
    return EvaluationSummary(
        id=evaluation.id,
        model=evaluation.model,
        hardware=evaluation.hardware,
        card_count=evaluation.card_count,
        business_scenario=evaluation.business_scenario,
        score=score_summary(evaluation),
        archived=evaluation.archived,
        created_at=evaluation.created_at,
    )


def payload_view(dimension: Dimension, raw: str | None) -> Any:
    """Parsed payload for display; unknown shapes are passed through as stored."""
    parsed = parse_payload(dimension, raw)
    if parsed is None:
        return None
    if isinstance(parsed, OpaquePayload):
        return parsed.data
    return parsed.model_dump(by_alias=True)


def to_detail(evaluation: Evaluation) -> dict[str, Any]:
    """Fields shared by the owner and admin detail views."""
    return {
        "id": evaluation.id,
        "user_id": evaluation.user_id,
        "model": evaluation.model,
        "hardware": evaluation.hardware,
        "card_count": evaluation.card_count,
        "business_scenario": evaluation.business_scenario,
        "performance_qps": evaluation.performance_qps,
        "performance_concurrency": evaluation.performance_concurrency,
        "business_data_types": data_types_of(evaluation),
        "business_data_quality": evaluation.business_data_quality,
        "business_data_volume": evaluation.business_data_volume,
        "resource_feasibility": payload_view(Dimension.RESOURCE, evaluation.resource_feasibility),
        "technical_feasibility": payload_view(Dimension.TECHNICAL, evaluation.technical_feasibility),
        "business_value": payload_view(Dimension.BUSINESS, evaluation.business_value),
        "score": score_summary(evaluation),
        "archived": evaluation.archived,
        "archived_at": evaluation.archived_at,
        "created_at": evaluation.created_at,
    }


class EvaluationService:
    def __init__(self, db: AsyncSession) -> None:
        self.evaluations = EvaluationRepository(db)

    async def submit(self, payload: EvaluationCreate, caller: Caller) -> Evaluation:
        business_value = (
            json.dumps(payload.business_value, ensure_ascii=False)
            if payload.business_value is not None
            else None
        )
        evaluation = await self.evaluations.create(
            user_id=caller.user_id,
            model=payload.model,
            hardware=payload.hardware,
            card_count=payload.card_count,
            business_scenario=payload.business_scenario,
            performance_qps=payload.performance_qps,
            performance_concurrency=payload.performance_concurrency,
            business_data_types=json.dumps(payload.business_data_types, ensure_ascii=False),
            business_data_quality=payload.business_data_quality,
            business_data_volume=payload.business_data_volume,
            resource_feasibility=json.dumps(payload.resource_feasibility, ensure_ascii=False),
            technical_feasibility=json.dumps(payload.technical_feasibility, ensure_ascii=False),
            business_value=business_value,
        )
        logger.info(
            "evaluation_recorded",
            evaluation_id=evaluation.id,
            user_id=caller.user_id,
            model=evaluation.model,
            hardware=evaluation.hardware,
        )
        return evaluation

    async def get_owned(self, evaluation_id: str, caller: Caller) -> EvaluationDetail:
        """Owner-only read. A record owned by someone else is reported as missing."""
        evaluation = await self.evaluations.find_by_id(evaluation_id)
        if evaluation is None or evaluation.user_id != caller.user_id:
            raise NotFoundError("Evaluation", evaluation_id)
        return EvaluationDetail(**to_detail(evaluation))

    async def history(self, caller: Caller) -> list[HistoryItem]:
        records = await self.evaluations.find_for_owner(caller.user_id, take=settings.history_limit)
        return [
            HistoryItem(
                id=record.id,
                created_at=record.created_at,
                model=record.model,
                business_scenario=record.business_scenario,
                score=overall_score(record.technical_feasibility, record.business_value),
            )
            for record in records
        ]

    # --- Admin views ---

    async def admin_list(
        self,
        params: PaginationParams,
        include_archived: bool = False,
    ) -> AdminEvaluationListResponse:
        records, total = await self.evaluations.list_page(
            skip=params.skip,
            take=params.page_size,
            include_archived=include_archived,
        )
        items = [
            AdminEvaluationItem(
                id=record.id,
                user_id=record.user_id,
                user_email=record.owner.email,
                user_name=record.owner.name,
                model=record.model,
                hardware=record.hardware,
                card_count=record.card_count,
                business_scenario=record.business_scenario,
                business_data_quality=record.business_data_quality,
                performance_qps=record.performance_qps,
                performance_concurrency=record.performance_concurrency,
                score=score_summary(record),
                archived=record.archived,
                archived_at=record.archived_at,
                created_at=record.created_at,
            )
            for record in records
        ]
        return AdminEvaluationListResponse(items=items, pagination=Pagination.build(params, total))

    async def admin_detail(self, evaluation_id: str) -> AdminEvaluationDetail:
        evaluation = await self.evaluations.find_with_owner(evaluation_id)
        if evaluation is None:
            raise NotFoundError("Evaluation", evaluation_id)
        return AdminEvaluationDetail(
            **to_detail(evaluation),
            user_email=evaluation.owner.email,
            user_name=evaluation.owner.name,
            user_phone=evaluation.owner.phone,
        )

    async def set_archived(self, evaluation_id: str, archived: bool) -> ArchiveResponse:
        evaluation = await self.evaluations.find_by_id(evaluation_id)
        if evaluation is None:
            raise NotFoundError("Evaluation", evaluation_id)
        evaluation = await self.evaluations.set_archived(evaluation, archived)
        logger.info("evaluation_archive_toggled", evaluation_id=evaluation_id, archived=archived)
        return ArchiveResponse(
            id=evaluation.id,
            archived=evaluation.archived,
            archived_at=evaluation.archived_at,
        )
