"""Tests for the admin request / approval workflow."""

import pytest

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from projectboard.core.exceptions import AccountCreationException, RequestNotFoundException
from projectboard.models.admin import AdminRequestIn
from projectboard.services.admin_service import (
    ADMIN_REQUESTS_KEY,
    approve_request,
    find_admin,
    list_admin_users,
    seed_admin_user,
    submit_admin_request,
)

NEW_ADMIN = {"name": "Lotte", "email": "lotte@school.nl", "password": "hunter22"}


def _request_access(client, **overrides):
    return client.post("/admin/request", json={**NEW_ADMIN, **overrides})


def _pending(client, headers):
    r = client.get("/admin/requests", headers=headers)
    assert r.status_code == 200
    return r.json()


def test_login_success_returns_token_and_admin(client):
    r = client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["access_token"]
    assert body["user"]["email"] == ADMIN_EMAIL
    assert body["user"]["approved"] is True
    assert body["user"]["approvedBy"] == "system"


def test_login_with_bad_password_is_401(client):
    r = client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
    assert r.status_code == 401


def test_login_of_unapproved_account_is_403(client):
    assert _request_access(client).status_code == 200
    r = client.post("/admin/login", json={"email": NEW_ADMIN["email"], "password": NEW_ADMIN["password"]})
    assert r.status_code == 403


def test_login_token_authorizes_admin_routes(client):
    token = client.post(
        "/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    ).json()["access_token"]
    assert client.get("/admin/requests", headers={"Authorization": f"Bearer {token}"}).status_code == 200


def test_request_creates_account_and_pending_entry(client, provider, admin_headers, store):
    r = _request_access(client)
    assert r.status_code == 200
    assert r.json() == {"message": "Admin access requested successfully"}
    assert NEW_ADMIN["email"] in provider.accounts

    pending = _pending(client, admin_headers)
    assert len(pending) == 1
    assert pending[0]["email"] == NEW_ADMIN["email"]
    assert pending[0]["approved"] is False
    assert pending[0]["id"].startswith("request_")
    # password is never stored
    assert "password" not in store.get(ADMIN_REQUESTS_KEY)[0]


def test_request_with_existing_email_fails_and_stores_nothing(client, admin_headers):
    r = _request_access(client, email=ADMIN_EMAIL)
    assert r.status_code == 400
    assert _pending(client, admin_headers) == []


def test_request_with_invalid_email_is_422(client):
    assert _request_access(client, email="not-an-email").status_code == 422


def test_weak_password_is_rejected_by_provider(client, provider, admin_headers):
    r = _request_access(client, password="123")
    assert r.status_code == 400
    assert NEW_ADMIN["email"] not in provider.accounts
    assert _pending(client, admin_headers) == []


def test_pending_requests_require_admin(client, provider):
    assert client.get("/admin/requests").status_code == 401
    provider.add_account("someone@school.nl", "pw123456")
    token = provider.issue_token("someone@school.nl")
    r = client.get("/admin/requests", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


def test_approve_promotes_requester(client, admin_headers, store):
    _request_access(client)
    request_id = _pending(client, admin_headers)[0]["id"]

    r = client.put(f"/admin/requests/{request_id}/approve", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Admin request approved successfully"}

    assert _pending(client, admin_headers) == []
    stored = store.get(ADMIN_REQUESTS_KEY)[0]
    assert stored["approved"] is True
    assert stored["approvedBy"] == ADMIN_EMAIL
    assert stored["approvedAt"]

    admin = find_admin(store, NEW_ADMIN["email"])
    assert admin is not None
    assert admin.approved_by == ADMIN_EMAIL

    login = client.post("/admin/login", json={"email": NEW_ADMIN["email"], "password": NEW_ADMIN["password"]})
    assert login.status_code == 200


def test_approving_twice_keeps_one_admin_entry(client, admin_headers, store):
    _request_access(client)
    request_id = _pending(client, admin_headers)[0]["id"]

    first = client.put(f"/admin/requests/{request_id}/approve", headers=admin_headers)
    stamp = store.get(ADMIN_REQUESTS_KEY)[0]["approvedAt"]
    second = client.put(f"/admin/requests/{request_id}/approve", headers=admin_headers)

    assert first.status_code == second.status_code == 200
    emails = [u.email for u in list_admin_users(store)]
    assert emails.count(NEW_ADMIN["email"]) == 1
    assert store.get(ADMIN_REQUESTS_KEY)[0]["approvedAt"] == stamp


def test_approve_unknown_request_is_404(client, admin_headers):
    r = client.put("/admin/requests/request_missing/approve", headers=admin_headers)
    assert r.status_code == 404


def test_approve_requires_admin(client, admin_headers):
    _request_access(client)
    request_id = _pending(client, admin_headers)[0]["id"]
    assert client.put(f"/admin/requests/{request_id}/approve").status_code == 401


def test_seed_admin_user_is_idempotent(store):
    _, created = seed_admin_user(store, "boot@school.nl", "Boot")
    _, again = seed_admin_user(store, "BOOT@school.nl", "Boot")
    assert created is True
    assert again is False
    assert [u.email for u in list_admin_users(store)] == ["boot@school.nl"]


@pytest.mark.asyncio
async def test_submit_aborts_when_account_creation_fails(store, provider):
    provider.add_account("taken@school.nl", "whatever")
    body = AdminRequestIn(name="Taken", email="taken@school.nl", password="secret99")
    with pytest.raises(AccountCreationException):
        await submit_admin_request(store, provider, body)
    assert store.get(ADMIN_REQUESTS_KEY) is None


def test_approve_service_with_unknown_id_writes_nothing(store):
    admin, _ = seed_admin_user(store, "boot@school.nl", "Boot")
    store.set(ADMIN_REQUESTS_KEY, [])
    with pytest.raises(RequestNotFoundException):
        approve_request(store, "request_x", admin)
    assert store.get(ADMIN_REQUESTS_KEY) == []
