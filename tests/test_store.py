"""Tests for the in-memory key-value store."""

import threading

import pytest

from projectboard.core.store import InMemoryKeyValueStore


def test_get_set_delete(store):
    assert store.get("missing") is None
    store.set("categories", ["Design"])
    assert store.get("categories") == ["Design"]
    store.delete("categories")
    assert store.get("categories") is None
    # deleting a missing key is a no-op
    store.delete("categories")


def test_get_by_prefix_only_returns_matching_keys(store):
    store.set("project_b", {"id": "project_b"})
    store.set("project_a", {"id": "project_a"})
    store.set("admin_users", [])
    assert [p["id"] for p in store.get_by_prefix("project_")] == ["project_a", "project_b"]
    assert store.get_by_prefix("nothing_") == []


def test_returned_values_are_copies(store):
    store.set("admin_users", [{"email": "a@b.nl"}])
    users = store.get("admin_users")
    users.append({"email": "mallory@b.nl"})
    assert store.get("admin_users") == [{"email": "a@b.nl"}]


def test_update_receives_none_for_missing_key(store):
    assert store.update("counter", lambda current: (current or 0) + 1) == 1
    assert store.update("counter", lambda current: current + 1) == 2


def test_failed_update_writes_nothing(store):
    store.set("admin_requests", [{"id": "request_1"}])

    def _boom(current):
        current.append({"id": "request_2"})
        raise LookupError("nope")

    with pytest.raises(LookupError):
        store.update("admin_requests", _boom)
    assert store.get("admin_requests") == [{"id": "request_1"}]


def test_concurrent_appends_are_not_lost():
    store = InMemoryKeyValueStore({"admin_requests": []})
    barrier = threading.Barrier(20)

    def _append(i):
        barrier.wait()
        store.update("admin_requests", lambda current: [*current, {"id": f"request_{i}"}])

    threads = [threading.Thread(target=_append, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.get("admin_requests")) == 20


def test_delete_waits_for_running_update(store):
    store.set("project_a", {"id": "project_a", "title": "Logo"})
    deleter = threading.Thread(target=store.delete, args=("project_a",))
    seen = {}

    def _slow_edit(current):
        deleter.start()
        deleter.join(timeout=0.2)
        seen["delete_blocked"] = deleter.is_alive()
        return {**current, "title": "Logo v2"}

    store.update("project_a", _slow_edit)
    deleter.join()

    assert seen["delete_blocked"] is True
    assert store.get("project_a") is None
