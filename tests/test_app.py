"""Tests for application startup and the reference-data endpoints."""

from fastapi.testclient import TestClient

from projectboard.config import settings
from projectboard.services.admin_service import find_admin
from projectboard.services.reference_service import DEFAULT_CATEGORIES, DEFAULT_SKILLS


def test_startup_seeds_reference_lists(client, store):
    assert client.get("/categories").json() == DEFAULT_CATEGORIES
    assert client.get("/skills").json() == DEFAULT_SKILLS
    assert store.get("admin_requests") == []


def test_startup_keeps_existing_lists(app, store):
    store.set("categories", ["Only This"])
    with TestClient(app) as client:
        assert client.get("/categories").json() == ["Only This"]


def test_missing_reference_list_is_empty(client, store):
    store.delete("skills")
    assert client.get("/skills").json() == []


def test_bootstrap_admin_is_seeded_once(app, store, monkeypatch):
    monkeypatch.setattr(settings, "BOOTSTRAP_ADMIN_EMAIL", "boot@school.nl")
    monkeypatch.setattr(settings, "BOOTSTRAP_ADMIN_NAME", "Boot")
    with TestClient(app):
        pass
    with TestClient(app):
        pass
    admin = find_admin(store, "boot@school.nl")
    assert admin is not None
    assert admin.approved_by == "system"
    assert [u["email"] for u in store.get("admin_users")].count("boot@school.nl") == 1


def test_store_failure_is_reported_as_500(client, store, monkeypatch, caplog):
    def _broken(prefix):
        raise RuntimeError("store offline")

    monkeypatch.setattr(store, "get_by_prefix", _broken)
    r = client.get("/projects")
    assert r.status_code == 500
    assert r.json() == {"detail": "Failed to fetch projects"}
    assert "store offline" in caplog.text
