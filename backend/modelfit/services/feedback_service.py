"""Feedback classifier.

Two pipelines share the ``feedbacks`` table:

- general feedback: ``type``/``title``/``description`` required, ``type`` in
  {bug, feature, improvement, other}, optional contact email
- module feedback: ``evaluation_id``/``module_type``/``feedback_type`` required,
  ``module_type`` in {resource, technical, business}, ``feedback_type`` in
  {like, dislike}, stored as a rating of positive/negative

Both endpoints accept anonymous transport but the classifier itself requires
an identity (``AUTH_REQUIRED``). Payload validation runs first, then the
identity check, and only then does anything touch the store.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.core.access import Caller
from modelfit.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from modelfit.models.feedback import Feedback
from modelfit.repositories.evaluations import EvaluationRepository
from modelfit.repositories.feedbacks import FeedbackRepository
from modelfit.schemas.common import (
    FeedbackKind,
    GeneralFeedbackType,
    ModuleFeedbackType,
    ModuleName,
    ModuleRating,
)
from modelfit.schemas.feedback import GeneralFeedbackCreate, ModuleFeedbackCreate

logger = structlog.get_logger()

TITLE_MAX_LENGTH = 255

RATING_BY_FEEDBACK_TYPE = {
    ModuleFeedbackType.LIKE: ModuleRating.POSITIVE,
    ModuleFeedbackType.DISLIKE: ModuleRating.NEGATIVE,
}


@dataclass(frozen=True)
class GeneralFeedback:
    feedback_type: GeneralFeedbackType
    title: str
    description: str
    contact_email: str | None


@dataclass(frozen=True)
class ModuleFeedback:
    evaluation_id: str
    module_name: ModuleName
    rating: ModuleRating
    comment: str | None


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


def classify_general(payload: GeneralFeedbackCreate) -> GeneralFeedback:
    feedback_type = _clean(payload.type)
    title = _clean(payload.title)
    description = _clean(payload.description)

    if not feedback_type or not title or not description:
        raise ValidationError("type, title and description are required", code="MISSING_FIELDS")

    try:
        kind = GeneralFeedbackType(feedback_type)
    except ValueError:
        raise ValidationError(f"Invalid feedback type: {feedback_type}", code="INVALID_TYPE") from None

    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title exceeds {TITLE_MAX_LENGTH} characters", code="TITLE_TOO_LONG")

    return GeneralFeedback(
        feedback_type=kind,
        title=title,
        description=description,
        contact_email=_clean(payload.email) or None,
    )


def classify_module(payload: ModuleFeedbackCreate) -> ModuleFeedback:
    evaluation_id = _clean(payload.evaluation_id)
    module_type = _clean(payload.module_type)
    feedback_type = _clean(payload.feedback_type)

    if not evaluation_id or not module_type or not feedback_type:
        raise ValidationError(
            "evaluation_id, module_type and feedback_type are required",
            code="MISSING_FIELDS",
        )

    try:
        module_name = ModuleName(module_type)
    except ValueError:
        raise ValidationError(f"Invalid module type: {module_type}", code="INVALID_MODULE_TYPE") from None

    try:
        vote = ModuleFeedbackType(feedback_type)
    except ValueError:
        raise ValidationError(
            f"Invalid feedback type: {feedback_type}", code="INVALID_FEEDBACK_TYPE"
        ) from None

    return ModuleFeedback(
        evaluation_id=evaluation_id,
        module_name=module_name,
        rating=RATING_BY_FEEDBACK_TYPE[vote],
        comment=_clean(payload.comment) or None,
    )


def require_identity(caller: Caller | None) -> Caller:
    if caller is None:
        raise AuthenticationError("Sign in to submit feedback", code="AUTH_REQUIRED")
    return caller


class FeedbackService:
    def __init__(self, db: AsyncSession) -> None:
        self.feedbacks = FeedbackRepository(db)
        self.evaluations = EvaluationRepository(db)

    async def submit_general(self, payload: GeneralFeedbackCreate, caller: Caller | None) -> Feedback:
        feedback = classify_general(payload)
        owner = require_identity(caller)

        record = await self.feedbacks.create(
            user_id=owner.user_id,
            type=FeedbackKind.GENERAL.value,
            feedback_type=feedback.feedback_type.value,
            title=feedback.title,
            description=feedback.description,
            contact_email=feedback.contact_email,
        )
        logger.info(
            "general_feedback_recorded",
            feedback_id=record.id,
            user_id=owner.user_id,
            feedback_type=feedback.feedback_type.value,
        )
        return record

    async def submit_module(self, payload: ModuleFeedbackCreate, caller: Caller | None) -> Feedback:
        feedback = classify_module(payload)
        owner = require_identity(caller)

        evaluation = await self.evaluations.find_by_id(feedback.evaluation_id)
        if evaluation is None:
            raise NotFoundError("Evaluation", feedback.evaluation_id, code="EVALUATION_NOT_FOUND")

        record = await self.feedbacks.create(
            user_id=owner.user_id,
            type=FeedbackKind.MODULE.value,
            evaluation_id=evaluation.id,
            module_name=feedback.module_name.value,
            rating=feedback.rating.value,
            comment=feedback.comment,
        )
        logger.info(
            "module_feedback_recorded",
            feedback_id=record.id,
            user_id=owner.user_id,
            evaluation_id=evaluation.id,
            module=feedback.module_name.value,
            rating=feedback.rating.value,
        )
        return record
