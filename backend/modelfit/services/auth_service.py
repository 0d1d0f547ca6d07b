"""Registration, login and the super-admin bootstrap."""

from __future__ import annotations

import hmac
import re

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from modelfit.config import settings
from modelfit.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from modelfit.core.security import hash_password, issue_token, verify_password
from modelfit.models.user import User
from modelfit.repositories.users import UserRepository
from modelfit.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from modelfit.schemas.common import Role

logger = structlog.get_logger()

PHONE_PATTERN = re.compile(r"^1[3-9]\d{9}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def display_name(user: User) -> str:
    return user.name or user.email or user.phone or user.id


def secret_matches(presented: str | None, expected: str) -> bool:
    if not presented:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


class AuthService:
    def __init__(self, db: AsyncSession) -> None:
        self.users = UserRepository(db)

    def _token_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            user_id=user.id,
            username=display_name(user),
            role=user.role,
            token=issue_token(user.id, user.email),
        )

    async def register(self, payload: RegisterRequest) -> AuthResponse:
        email = _clean(payload.email)
        phone = _clean(payload.phone)
        if (not email and not phone) or not payload.password:
            raise ValidationError("An email or phone and a password are required", code="MISSING_FIELDS")
        if email and not EMAIL_PATTERN.match(email):
            raise ValidationError("Email format is invalid", code="INVALID_EMAIL")
        if phone and not PHONE_PATTERN.match(phone):
            raise ValidationError("Phone number format is invalid", code="INVALID_PHONE")
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                code="WEAK_PASSWORD",
            )

        if email and await self.users.find_by_email(email):
            raise ConflictError("An account with this email already exists", code="USER_EXISTS")
        if phone and await self.users.find_by_phone(phone):
            raise ConflictError("An account with this phone already exists", code="USER_EXISTS")

        digest = await run_in_threadpool(hash_password, payload.password)
        user = await self.users.create(
            email=email,
            phone=phone,
            password_hash=digest,
            name=_clean(payload.name),
            role=Role.USER.value,
        )
        logger.info("user_registered", user_id=user.id)
        return self._token_response(user)

    async def login(self, payload: LoginRequest) -> AuthResponse:
        email = _clean(payload.email)
        phone = _clean(payload.phone)
        if bool(email) == bool(phone) or not payload.password:
            raise ValidationError(
                "Provide exactly one of email or phone, and a password",
                code="MISSING_FIELDS",
            )

        user = await (self.users.find_by_email(email) if email else self.users.find_by_phone(phone))
        # Unknown account and wrong password share one response
        if user is None or not await run_in_threadpool(verify_password, payload.password, user.password_hash):
            logger.info("login_failed", by="email" if email else "phone")
            raise AuthenticationError("Invalid credentials", code="INVALID_CREDENTIALS")

        logger.info("user_logged_in", user_id=user.id)
        return self._token_response(user)

    async def profile(self, user_id: str) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise AuthenticationError("User not found", code="UNAUTHORIZED")
        return user

    async def bootstrap_super_admin(self, identifier: str | None, secret: str | None) -> tuple[User, bool]:
        """Promote the identity matching ``identifier`` (email or phone) to super_admin.

        The secret is checked before anything else, so a wrong secret never
        reveals whether the identifier exists. Returns the user and whether
        its role changed.
        """
        if not settings.admin_init_enabled:
            raise NotFoundError("Endpoint", "admin/init")
        if not secret_matches(secret, settings.admin_init_secret):
            logger.warning("super_admin_bootstrap_rejected")
            raise AuthorizationError("Invalid secret", code="INVALID_SECRET")

        return await self.promote_super_admin(identifier)

    async def promote_super_admin(self, identifier: str | None) -> tuple[User, bool]:
        """Unchecked promotion, shared by the bootstrap endpoint and the CLI."""
        identifier = _clean(identifier)
        if not identifier:
            raise ValidationError("An email or phone identifier is required", code="MISSING_FIELDS")

        user = await self.users.find_by_identifier(identifier)
        if user is None:
            raise NotFoundError("User", identifier, code="USER_NOT_FOUND")

        if user.role == Role.SUPER_ADMIN.value:
            return user, False

        user = await self.users.update(user, role=Role.SUPER_ADMIN.value)
        logger.warning("super_admin_promoted", user_id=user.id)
        return user, True
