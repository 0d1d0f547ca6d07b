"""User, admin-role and feedback management for the admin console."""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.core.access import AdminCaller
from modelfit.core.exceptions import NotFoundError, ValidationError
from modelfit.models.feedback import Feedback
from modelfit.models.user import User
from modelfit.repositories.feedbacks import FeedbackRepository
from modelfit.repositories.users import UserRepository
from modelfit.schemas.admin import (
    AdminListResponse,
    AdminUserListResponse,
    AdminUserResponse,
    RoleChangeResponse,
)
from modelfit.schemas.common import ADMIN_ROLES, Pagination, PaginationParams, Role
from modelfit.schemas.feedback import FeedbackListResponse, FeedbackResponse

logger = structlog.get_logger()


def to_admin_user(user: User, evaluation_count: int, feedback_count: int) -> AdminUserResponse:
    return AdminUserResponse(
        id=user.id,
        email=user.email,
        phone=user.phone,
        name=user.name,
        role=user.role,
        evaluation_count=evaluation_count,
        feedback_count=feedback_count,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def to_feedback(feedback: Feedback) -> FeedbackResponse:
    return FeedbackResponse(
        id=feedback.id,
        user_id=feedback.user_id,
        user_email=feedback.owner.email,
        user_name=feedback.owner.name,
        type=feedback.type,
        feedback_type=feedback.feedback_type,
        title=feedback.title,
        description=feedback.description,
        contact_email=feedback.contact_email,
        evaluation_id=feedback.evaluation_id,
        module_name=feedback.module_name,
        rating=feedback.rating,
        comment=feedback.comment,
        created_at=feedback.created_at,
    )


def ensure_not_self(caller: AdminCaller, user_id: str) -> None:
    """Role changes never apply to the caller's own account."""
    if user_id == caller.user_id:
        raise ValidationError("You cannot change your own role", code="CANNOT_REVOKE_SELF")


class AdminService:
    def __init__(self, db: AsyncSession) -> None:
        self.users = UserRepository(db)
        self.feedbacks = FeedbackRepository(db)

    async def list_users(self, params: PaginationParams) -> AdminUserListResponse:
        total = await self.users.count()
        rows = await self.users.list_with_counts(skip=params.skip, take=params.page_size)
        return AdminUserListResponse(
            items=[to_admin_user(*row) for row in rows],
            pagination=Pagination.build(params, total),
        )

    async def list_feedbacks(self, params: PaginationParams) -> FeedbackListResponse:
        records, total = await self.feedbacks.list_page(skip=params.skip, take=params.page_size)
        return FeedbackListResponse(
            items=[to_feedback(record) for record in records],
            pagination=Pagination.build(params, total),
        )

    async def list_admins(self) -> AdminListResponse:
        rows = await self.users.list_admins()
        return AdminListResponse(items=[to_admin_user(*row) for row in rows], total=len(rows))

    async def _set_role(self, user_id: str, role: Role) -> AdminUserResponse:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id, code="USER_NOT_FOUND")
        user = await self.users.update(user, role=role.value)
        rows = await self.users.list_with_counts(User.id == user.id, take=1)
        return to_admin_user(*rows[0])

    async def grant_role(self, caller: AdminCaller, user_id: str, role: Role) -> RoleChangeResponse:
        ensure_not_self(caller, user_id)
        if role.value not in ADMIN_ROLES:
            raise ValidationError(f"Role must be one of {', '.join(ADMIN_ROLES)}", code="INVALID_ROLE")
        user = await self._set_role(user_id, role)
        logger.warning("admin_role_granted", by=caller.user_id, user_id=user_id, role=role.value)
        return RoleChangeResponse(user=user, message=f"User is now {role.value}")

    async def revoke_role(self, caller: AdminCaller, user_id: str) -> RoleChangeResponse:
        ensure_not_self(caller, user_id)
        user = await self._set_role(user_id, Role.USER)
        logger.warning("admin_role_revoked", by=caller.user_id, user_id=user_id)
        return RoleChangeResponse(user=user, message="Admin role revoked")
