from datetime import datetime

from pydantic import BaseModel

from modelfit.schemas.common import Pagination


class GeneralFeedbackCreate(BaseModel):
    # Loosely typed on purpose: the classifier reports precise error codes
    type: str | None = None
    title: str | None = None
    description: str | None = None
    email: str | None = None


class ModuleFeedbackCreate(BaseModel):
    evaluation_id: str | None = None
    module_type: str | None = None
    feedback_type: str | None = None
    comment: str | None = None


class FeedbackCreated(BaseModel):
    feedback_id: str
    message: str


class FeedbackResponse(BaseModel):
    id: str
    user_id: str
    user_email: str | None
    user_name: str | None
    type: str
    feedback_type: str | None
    title: str | None
    description: str | None
    contact_email: str | None
    evaluation_id: str | None
    module_name: str | None
    rating: str | None
    comment: str | None
    created_at: datetime


class FeedbackListResponse(BaseModel):
    items: list[FeedbackResponse]
    pagination: Pagination
