"""Access control gate.

A request moves through: no token -> token present -> token valid -> role
checked -> allowed or denied. Failures before the role check are 401
(``MISSING_TOKEN``, ``INVALID_TOKEN``, ``UNAUTHORIZED``); an identity whose
role is too low is 403 (``FORBIDDEN``). The two classes are never mixed.

Roles are re-read from the store on every gated request, so a demoted admin
loses access on the next call.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import Depends, Security
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from modelfit.core.exceptions import AuthenticationError, AuthorizationError
from modelfit.core.security import extract_bearer, verify_token
from modelfit.db.session import get_db
from modelfit.repositories.users import UserRepository
from modelfit.schemas.common import ADMIN_ROLES, Role

logger = structlog.get_logger()

authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


@dataclass(frozen=True)
class Caller:
    """Identity recovered from a verified token."""

    user_id: str
    email: str | None


@dataclass(frozen=True)
class AdminCaller(Caller):
    role: str

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN.value


def authenticate(authorization: str | None) -> Caller:
    """Resolve the Authorization header into a caller or fail with 401."""
    token = extract_bearer(authorization)
    if token is None:
        raise AuthenticationError("Missing bearer token", code="MISSING_TOKEN")

    payload = verify_token(token)
    if payload is None:
        raise AuthenticationError("Invalid or expired token", code="INVALID_TOKEN")

    return Caller(user_id=payload.subject_id, email=payload.subject_email)


def authenticate_optional(authorization: str | None) -> Caller | None:
    """Like ``authenticate`` but a missing or unusable token means anonymous.

    Stale client tokens therefore never break endpoints open to anonymous
    callers.
    """
    try:
        return authenticate(authorization)
    except AuthenticationError:
        return None


async def authorize(
    authorization: str | None,
    users: UserRepository,
    super_admin: bool = False,
) -> AdminCaller:
    """Require an admin (or, with ``super_admin=True``, a super admin)."""
    caller = authenticate(authorization)

    user = await users.find_by_id(caller.user_id)
    if user is None:
        raise AuthenticationError("User not found", code="UNAUTHORIZED")

    if user.role not in ADMIN_ROLES:
        logger.info("admin_access_denied", user_id=user.id, role=user.role)
        raise AuthorizationError("Insufficient privilege: admin role required")

    if super_admin and user.role != Role.SUPER_ADMIN.value:
        logger.info("super_admin_access_denied", user_id=user.id, role=user.role)
        raise AuthorizationError("Insufficient privilege: super admin role required")

    return AdminCaller(user_id=user.id, email=user.email, role=user.role)


async def require_user(authorization: str | None = Security(authorization_header)) -> Caller:
    return authenticate(authorization)


async def optional_user(authorization: str | None = Security(authorization_header)) -> Caller | None:
    return authenticate_optional(authorization)


async def require_admin(
    authorization: str | None = Security(authorization_header),
    db: AsyncSession = Depends(get_db),
) -> AdminCaller:
    return await authorize(authorization, UserRepository(db))


async def require_super_admin(
    authorization: str | None = Security(authorization_header),
    db: AsyncSession = Depends(get_db),
) -> AdminCaller:
    return await authorize(authorization, UserRepository(db), super_admin=True)


UserDep = Depends(require_user)
OptionalUserDep = Depends(optional_user)
AdminDep = Depends(require_admin)
SuperAdminDep = Depends(require_super_admin)
