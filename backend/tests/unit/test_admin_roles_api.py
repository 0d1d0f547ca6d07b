"""API tests for super-admin role management and the bootstrap endpoint."""

import pytest

from modelfit.config import settings


@pytest.fixture
def init_secret(monkeypatch) -> str:
    monkeypatch.setattr(settings, "admin_init_secret", "bootstrap-secret")
    monkeypatch.setattr(settings, "admin_init_enabled", True)
    return "bootstrap-secret"


class TestRoleManagement:

    async def test_grant_and_list(self, client, make_user) -> None:
        _, root = await make_user(role="super_admin")
        target, target_headers = await make_user()

        resp = await client.post(
            "/api/v1/admin/admins", json={"user_id": target.id, "role": "admin"}, headers=root
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["role"] == "admin"

        # Role is re-read on every request, so the new admin is in straight away
        assert (await client.get("/api/v1/admin/stats", headers=target_headers)).status_code == 200

        admins = (await client.get("/api/v1/admin/admins", headers=root)).json()
        assert admins["total"] == 2
        assert admins["items"][0]["role"] == "super_admin"

    async def test_grant_user_role_is_rejected(self, client, make_user) -> None:
        _, root = await make_user(role="super_admin")
        target, _ = await make_user()
        resp = await client.post(
            "/api/v1/admin/admins", json={"user_id": target.id, "role": "user"}, headers=root
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_ROLE"

    async def test_grant_unknown_role_is_400(self, client, make_user) -> None:
        _, root = await make_user(role="super_admin")
        target, _ = await make_user()
        resp = await client.post(
            "/api/v1/admin/admins", json={"user_id": target.id, "role": "owner"}, headers=root
        )
        assert resp.status_code == 400

    async def test_grant_unknown_user_is_404(self, client, make_user) -> None:
        _, root = await make_user(role="super_admin")
        resp = await client.post(
            "/api/v1/admin/admins", json={"user_id": "ghost", "role": "admin"}, headers=root
        )
        assert resp.status_code == 404
        assert resp.json()["code"] == "USER_NOT_FOUND"

    async def test_revoke(self, client, make_user) -> None:
        _, root = await make_user(role="super_admin")
        target, target_headers = await make_user(role="admin")

        resp = await client.delete(f"/api/v1/admin/admins/{target.id}", headers=root)
        assert resp.status_code == 200
        assert resp.json()["user"]["role"] == "user"
        assert (await client.get("/api/v1/admin/stats", headers=target_headers)).status_code == 403

    async def test_cannot_revoke_self(self, client, make_user) -> None:
        root_user, root = await make_user(role="super_admin")
        resp = await client.delete(f"/api/v1/admin/admins/{root_user.id}", headers=root)
        assert resp.status_code == 400
        assert resp.json()["code"] == "CANNOT_REVOKE_SELF"

    async def test_cannot_grant_self(self, client, make_user) -> None:
        root_user, root = await make_user(role="super_admin")
        resp = await client.post(
            "/api/v1/admin/admins", json={"user_id": root_user.id, "role": "admin"}, headers=root
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "CANNOT_REVOKE_SELF"

        me = await client.get("/api/v1/auth/me", headers=root)
        assert me.json()["role"] == "super_admin"

    async def test_admin_cannot_manage_roles(self, client, make_user) -> None:
        _, admin = await make_user(role="admin")
        target, _ = await make_user()
        resp = await client.post(
            "/api/v1/admin/admins", json={"user_id": target.id, "role": "admin"}, headers=admin
        )
        assert resp.status_code == 403


class TestBootstrap:

    async def test_promotes_by_email(self, client, make_user, init_secret) -> None:
        user, headers = await make_user(email="boss@example.com")
        resp = await client.post(
            "/api/v1/admin/init", json={"identifier": "boss@example.com", "secret": init_secret}
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["role"] == "super_admin"
        assert (await client.get("/api/v1/admin/admins", headers=headers)).status_code == 200

    async def test_promotes_by_phone(self, client, make_user, init_secret) -> None:
        await make_user(phone="13700000000")
        resp = await client.post(
            "/api/v1/admin/init", json={"identifier": "13700000000", "secret": init_secret}
        )
        assert resp.json()["user"]["role"] == "super_admin"

    async def test_already_super_admin(self, client, make_user, init_secret) -> None:
        await make_user(email="boss@example.com", role="super_admin")
        resp = await client.post(
            "/api/v1/admin/init", json={"identifier": "boss@example.com", "secret": init_secret}
        )
        assert resp.status_code == 200
        assert resp.json()["message"] == "User is already super_admin"

    async def test_wrong_secret_does_not_reveal_identifier(self, client, make_user, init_secret) -> None:
        await make_user(email="boss@example.com")
        known = await client.post(
            "/api/v1/admin/init", json={"identifier": "boss@example.com", "secret": "guess"}
        )
        unknown = await client.post(
            "/api/v1/admin/init", json={"identifier": "ghost@example.com", "secret": "guess"}
        )
        assert known.status_code == unknown.status_code == 403
        assert known.json() == unknown.json()
        assert known.json()["code"] == "INVALID_SECRET"

    async def test_missing_secret(self, client, init_secret) -> None:
        resp = await client.post("/api/v1/admin/init", json={"identifier": "boss@example.com"})
        assert resp.status_code == 403

    async def test_unknown_identifier(self, client, init_secret) -> None:
        resp = await client.post(
            "/api/v1/admin/init", json={"identifier": "ghost@example.com", "secret": init_secret}
        )
        assert resp.status_code == 404
        assert resp.json()["code"] == "USER_NOT_FOUND"

    async def test_disabled(self, client, make_user, init_secret, monkeypatch) -> None:
        monkeypatch.setattr(settings, "admin_init_enabled", False)
        await make_user(email="boss@example.com")
        resp = await client.post(
            "/api/v1/admin/init", json={"identifier": "boss@example.com", "secret": init_secret}
        )
        assert resp.status_code == 404
