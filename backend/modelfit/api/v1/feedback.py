from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.core.access import Caller, OptionalUserDep
from modelfit.db.session import get_db
from modelfit.schemas.feedback import FeedbackCreated, GeneralFeedbackCreate, ModuleFeedbackCreate
from modelfit.services.feedback_service import FeedbackService

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("/general", response_model=FeedbackCreated, status_code=201)
async def submit_general_feedback(
    payload: GeneralFeedbackCreate,
    caller: Caller | None = OptionalUserDep,
    db: AsyncSession = Depends(get_db),
) -> FeedbackCreated:
    record = await FeedbackService(db).submit_general(payload, caller)
    return FeedbackCreated(feedback_id=record.id, message="Thanks for your feedback")


@router.post("/module", response_model=FeedbackCreated, status_code=201)
async def submit_module_feedback(
    payload: ModuleFeedbackCreate,
    caller: Caller | None = OptionalUserDep,
    db: AsyncSession = Depends(get_db),
) -> FeedbackCreated:
    record = await FeedbackService(db).submit_module(payload, caller)
    return FeedbackCreated(feedback_id=record.id, message="Thanks for your feedback")
