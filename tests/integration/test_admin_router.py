"""Integration tests for admin router — employee provisioning and the forced-reset gate."""

import pytest
from fastapi import Depends

from dayflow_hrms.accounts.state import Role
from dayflow_hrms.common.security import require_cleared_account


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def _create_employee(client, headers, first="Jane", last="Doe", **extra):
    payload = {"first_name": first, "last_name": last, "year_of_joining": 2024}
    payload.update(extra)
    resp = await client.post("/admin/employees", json=payload, headers=headers)
    assert resp.status_code == 201
    return resp.json()


async def _login(client, identifier, password):
    return await client.post("/auth/login", json={
        "login_id_or_email": identifier, "password": password,
    })


@pytest.fixture
def gated_app(app):
    """Adds an employee-only route behind the cleared-account gate."""
    async def probe(claims=Depends(require_cleared_account(Role.EMPLOYEE))):
        return {"account_id": claims.account_id}

    app.add_api_route("/probe", probe, methods=["GET"])
    return app


class TestCreateEmployee:
    async def test_create_employee(self, client, admin_headers):
        data = await _create_employee(client, admin_headers)
        assert data["login_id"] == "ACJADO20240001"
        assert len(data["temporary_password"]) == 10
        assert data["employee"]["must_reset_password"] is True
        assert data["employee"]["role"] == "employee"
        assert "change password" in data["message"]

    async def test_serials_advance(self, client, admin_headers):
        await _create_employee(client, admin_headers)
        second = await _create_employee(client, admin_headers, "Arjun", "Mehta")
        assert second["login_id"] == "ACARME20240002"

    async def test_requires_token(self, client):
        resp = await client.post("/admin/employees", json={
            "first_name": "Jane", "last_name": "Doe",
        })
        assert resp.status_code == 401

    async def test_employee_cannot_create(self, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        login = await _login(client, created["login_id"], created["temporary_password"])
        token = login.json()["tokens"]["access_token"]
        resp = await client.post(
            "/admin/employees",
            json={"first_name": "Li", "last_name": "Wu"},
            headers=bearer(token),
        )
        assert resp.status_code == 403

    async def test_duplicate_email(self, client, admin_headers):
        await _create_employee(client, admin_headers, email="jane@acme.io")
        resp = await client.post(
            "/admin/employees",
            json={"first_name": "Janet", "last_name": "Doe", "email": "jane@acme.io"},
            headers=admin_headers,
        )
        assert resp.status_code == 409

    async def test_invalid_year(self, client, admin_headers):
        resp = await client.post(
            "/admin/employees",
            json={"first_name": "Jane", "last_name": "Doe", "year_of_joining": 24},
            headers=admin_headers,
        )
        assert resp.status_code == 422


class TestListEmployees:
    async def test_list(self, client, admin_headers):
        await _create_employee(client, admin_headers)
        await _create_employee(client, admin_headers, "Arjun", "Mehta")
        resp = await client.get("/admin/employees", headers=admin_headers)
        assert resp.status_code == 200
        assert {e["login_id"] for e in resp.json()} == {"ACJADO20240001", "ACARME20240002"}

    async def test_other_tenant_sees_nothing(self, client, admin_headers):
        await _create_employee(client, admin_headers)
        signup = await client.post("/auth/admin/signup", json={
            "company_name": "Globex", "email": "admin@globex.io", "password": "Gl0bex-Passw0rd!",
        })
        other = bearer(signup.json()["tokens"]["access_token"])
        resp = await client.get("/admin/employees", headers=other)
        assert resp.status_code == 200
        assert resp.json() == []


class TestEmployeeFirstLogin:
    async def test_login_with_temporary_password(self, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        resp = await _login(client, created["login_id"].lower(), created["temporary_password"])
        assert resp.status_code == 200
        assert resp.json()["account"]["must_reset_password"] is True

    async def test_gate_until_password_changed(self, gated_app, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        login = await _login(client, created["login_id"], created["temporary_password"])
        headers = bearer(login.json()["tokens"]["access_token"])

        resp = await client.get("/probe", headers=headers)
        assert resp.status_code == 403
        assert resp.json()["code"] == "PASSWORD_RESET_REQUIRED"

        changed = await client.post("/auth/change-password", headers=headers, json={
            "current_password": created["temporary_password"],
            "new_password": "N3w-Passw0rd!",
        })
        assert changed.status_code == 200

        resp = await client.get("/probe", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["account_id"] == created["employee"]["id"]

    async def test_me_reflects_reset_state(self, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        login = await _login(client, created["login_id"], created["temporary_password"])
        headers = bearer(login.json()["tokens"]["access_token"])
        await client.post("/auth/change-password", headers=headers, json={
            "current_password": created["temporary_password"],
            "new_password": "N3w-Passw0rd!",
        })
        me = await client.get("/auth/me", headers=headers)
        assert me.json()["must_reset_password"] is False


class TestActivation:
    async def test_deactivate_blocks_login(self, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        employee_id = created["employee"]["id"]
        resp = await client.post(
            f"/admin/employees/{employee_id}/deactivate", headers=admin_headers
        )
        assert resp.status_code == 200
        assert resp.json()["is_active"] is False

        login = await _login(client, created["login_id"], created["temporary_password"])
        assert login.status_code == 403
        assert login.json()["code"] == "ACCOUNT_DEACTIVATED"

    async def test_deactivated_with_wrong_password(self, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        await client.post(
            f"/admin/employees/{created['employee']['id']}/deactivate", headers=admin_headers
        )
        login = await _login(client, created["login_id"], "wrong-password")
        assert login.status_code == 403

    async def test_deactivated_token_fails_gate(self, gated_app, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        login = await _login(client, created["login_id"], created["temporary_password"])
        headers = bearer(login.json()["tokens"]["access_token"])
        await client.post(
            f"/admin/employees/{created['employee']['id']}/deactivate", headers=admin_headers
        )
        resp = await client.get("/probe", headers=headers)
        assert resp.status_code == 403
        assert resp.json()["code"] == "ACCOUNT_DEACTIVATED"

    async def test_reactivate(self, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        employee_id = created["employee"]["id"]
        await client.post(f"/admin/employees/{employee_id}/deactivate", headers=admin_headers)
        resp = await client.post(
            f"/admin/employees/{employee_id}/activate", headers=admin_headers
        )
        assert resp.status_code == 200
        login = await _login(client, created["login_id"], created["temporary_password"])
        assert login.status_code == 200

    async def test_unknown_employee(self, client, admin_headers):
        resp = await client.post(
            "/admin/employees/nonexistent/deactivate", headers=admin_headers
        )
        assert resp.status_code == 404
        assert resp.json()["code"] == "NOT_FOUND"

    async def test_other_tenant_cannot_deactivate(self, client, admin_headers):
        created = await _create_employee(client, admin_headers)
        signup = await client.post("/auth/admin/signup", json={
            "company_name": "Globex", "email": "admin@globex.io", "password": "Gl0bex-Passw0rd!",
        })
        other = bearer(signup.json()["tokens"]["access_token"])
        resp = await client.post(
            f"/admin/employees/{created['employee']['id']}/deactivate", headers=other
        )
        assert resp.status_code == 404
