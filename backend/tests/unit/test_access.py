"""Unit and API tests for the access control gate."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import update

from modelfit.core.access import authenticate, authenticate_optional, authorize
from modelfit.core.exceptions import AuthenticationError, AuthorizationError
from modelfit.core.security import issue_token
from modelfit.models import User


def _bearer(user_id: str = "user-1") -> str:
    return f"Bearer {issue_token(user_id, 'a@example.com')}"


def _users_returning(role: str | None) -> MagicMock:
    users = MagicMock()
    if role is None:
        users.find_by_id = AsyncMock(return_value=None)
    else:
        user = MagicMock(id="user-1", email="a@example.com", role=role)
        users.find_by_id = AsyncMock(return_value=user)
    return users


class TestAuthenticate:

    def test_missing_token(self) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(None)
        assert exc_info.value.code == "MISSING_TOKEN"
        assert exc_info.value.status_code == 401

    def test_wrong_scheme_is_missing(self) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate("Token abc")
        assert exc_info.value.code == "MISSING_TOKEN"

    def test_invalid_token(self) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate("Bearer not-a-jwt")
        assert exc_info.value.code == "INVALID_TOKEN"

    def test_valid_token(self) -> None:
        caller = authenticate(_bearer("user-9"))
        assert caller.user_id == "user-9"
        assert caller.email == "a@example.com"

    def test_optional_never_raises(self) -> None:
        assert authenticate_optional(None) is None
        assert authenticate_optional("Bearer broken") is None
        assert authenticate_optional(_bearer()).user_id == "user-1"


class TestAuthorize:

    @pytest.mark.asyncio
    async def test_admin_allowed(self) -> None:
        caller = await authorize(_bearer(), _users_returning("admin"))
        assert caller.role == "admin"
        assert not caller.is_super_admin

    @pytest.mark.asyncio
    async def test_user_role_forbidden(self) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            await authorize(_bearer(), _users_returning("user"))
        assert exc_info.value.status_code == 403
        assert exc_info.value.code == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_admin_cannot_act_as_super_admin(self) -> None:
        with pytest.raises(AuthorizationError):
            await authorize(_bearer(), _users_returning("admin"), super_admin=True)

    @pytest.mark.asyncio
    async def test_super_admin_passes_both_gates(self) -> None:
        users = _users_returning("super_admin")
        assert (await authorize(_bearer(), users)).is_super_admin
        assert (await authorize(_bearer(), users, super_admin=True)).is_super_admin

    @pytest.mark.asyncio
    async def test_deleted_user_is_unauthorized(self) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await authorize(_bearer(), _users_returning(None))
        assert exc_info.value.code == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_token_checked_before_lookup(self) -> None:
        users = _users_returning("admin")
        with pytest.raises(AuthenticationError):
            await authorize(None, users)
        users.find_by_id.assert_not_awaited()


class TestGateOverHttp:

    async def test_missing_token_is_401(self, client) -> None:
        resp = await client.get("/api/v1/admin/stats")
        assert resp.status_code == 401
        assert resp.json()["code"] == "MISSING_TOKEN"

    async def test_invalid_token_is_401(self, client) -> None:
        resp = await client.get("/api/v1/admin/stats", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401
        assert resp.json()["code"] == "INVALID_TOKEN"

    async def test_plain_user_is_403(self, client, make_user) -> None:
        _, headers = await make_user()
        resp = await client.get("/api/v1/admin/stats", headers=headers)
        assert resp.status_code == 403
        assert resp.json()["code"] == "FORBIDDEN"

    async def test_admin_is_403_on_super_admin_routes(self, client, make_user) -> None:
        _, headers = await make_user(role="admin")
        assert (await client.get("/api/v1/admin/stats", headers=headers)).status_code == 200
        assert (await client.get("/api/v1/admin/admins", headers=headers)).status_code == 403

    async def test_token_for_unknown_user_is_401(self, client) -> None:
        headers = {"Authorization": _bearer("no-such-user")}
        resp = await client.get("/api/v1/admin/stats", headers=headers)
        assert resp.status_code == 401
        assert resp.json()["code"] == "UNAUTHORIZED"

    async def test_demotion_applies_on_next_request(self, client, make_user, session_factory) -> None:
        admin, headers = await make_user(role="admin")
        assert (await client.get("/api/v1/admin/stats", headers=headers)).status_code == 200

        async with session_factory() as session:
            await session.execute(update(User).where(User.id == admin.id).values(role="user"))
            await session.commit()

        assert (await client.get("/api/v1/admin/stats", headers=headers)).status_code == 403
