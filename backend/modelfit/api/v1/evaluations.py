"""Evaluation API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.core.access import Caller, UserDep
from modelfit.db.session import get_db
from modelfit.schemas.evaluation import (
    EvaluationCreate,
    EvaluationDetail,
    EvaluationSummary,
    HistoryResponse,
)
from modelfit.services.evaluation_service import EvaluationService, to_summary

router = APIRouter(tags=["evaluations"])


@router.post(
    "/evaluations",
    response_model=EvaluationSummary,
    status_code=201,
)
async def create_evaluation(
    payload: EvaluationCreate,
    caller: Caller = UserDep,
    db: AsyncSession = Depends(get_db),
) -> EvaluationSummary:
    """Persist an evaluation whose feasibility payloads were already scored."""
    evaluation = await EvaluationService(db).submit(payload, caller)
    return to_summary(evaluation)


@router.get("/evaluations/{evaluation_id}", response_model=EvaluationDetail)
async def get_evaluation(
    evaluation_id: str,
    caller: Caller = UserDep,
    db: AsyncSession = Depends(get_db),
) -> EvaluationDetail:
    return await EvaluationService(db).get_owned(evaluation_id, caller)


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    caller: Caller = UserDep,
    db: AsyncSession = Depends(get_db),
) -> HistoryResponse:
    """The caller's most recent evaluations with their overall score."""
    items = await EvaluationService(db).history(caller)
    return HistoryResponse(items=items)
