"""Tests for the HTTP API, run in-process with FastAPI's TestClient."""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from foodjournal.config import AppConfig, DatabaseConfig
from foodjournal.db.errors import QueryExecutionError
from foodjournal.db.models import UserRepository
from foodjournal.main import create_app


@pytest.fixture
def client(config):
    app = create_app(config)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user(client) -> int:
    resp = client.post("/api/users", json={"email": "eater@example.com", "password": "secret"})
    assert resp.status_code == 200
    return resp.json()["id"]


def _create(client, user, **overrides):
    body = {"image": "img://a", "description": "Oatmeal", "category": "Breakfast"}
    body.update(overrides)
    return client.post(f"/api/users/{user}/journals", json=body)


class TestMeta:
    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_categories(self, client):
        assert client.get("/api/categories").json() == [
            "All",
            "Breakfast",
            "Lunch",
            "Dinner",
            "Snacks",
        ]

    def test_store_is_closed_on_shutdown(self, config):
        app = create_app(config)
        with TestClient(app):
            assert app.state.store.is_ready
        with pytest.raises(QueryExecutionError):
            app.state.store.execute("SELECT 1")


class TestUsers:
    def test_create(self, client):
        resp = client.post("/api/users", json={"email": "a@example.com", "password": "pw"})
        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "email": "a@example.com"}

    def test_duplicate_email(self, client, user):
        resp = client.post("/api/users", json={"email": "eater@example.com", "password": "pw"})
        assert resp.status_code == 409


class TestJournals:
    def test_create_and_list(self, client, user):
        resp = _create(client, user, description="  Oatmeal  ")
        assert resp.status_code == 201
        entry = resp.json()
        assert entry["id"] == 1
        assert entry["userId"] == user
        assert entry["description"] == "Oatmeal"
        assert entry["date"]

        listed = client.get(f"/api/users/{user}/journals").json()
        assert listed == [entry]

    def test_create_for_unknown_user(self, client):
        resp = _create(client, 404)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "User not found"

    def test_create_invalid(self, client, user):
        resp = _create(client, user, image=None)
        assert resp.status_code == 422
        assert client.get(f"/api/users/{user}/journals").json() == []

    def test_filter_by_category(self, client, user):
        _create(client, user, description="Toast", category="Breakfast")
        _create(client, user, description="Soup", category="Lunch")

        lunch = client.get(f"/api/users/{user}/journals", params={"category": "Lunch"}).json()
        assert [e["description"] for e in lunch] == ["Soup"]

        everything = client.get(f"/api/users/{user}/journals", params={"category": "All"}).json()
        assert len(everything) == 2

    def test_update(self, client, user):
        created = _create(client, user).json()
        resp = client.put(
            f"/api/users/{user}/journals/{created['id']}",
            json={"image": "img://a", "description": "Oatmeal with berries", "category": "Breakfast"},
        )
        assert resp.status_code == 200
        updated = resp.json()
        assert updated["description"] == "Oatmeal with berries"
        assert updated["date"] == created["date"]
        assert updated["id"] == created["id"]

    def test_update_missing(self, client, user):
        resp = client.put(
            f"/api/users/{user}/journals/77",
            json={"image": "img://a", "description": "Toast", "category": "Breakfast"},
        )
        assert resp.status_code == 404

    def test_delete(self, client, user):
        created = _create(client, user).json()

        resp = client.delete(f"/api/users/{user}/journals/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"deleted": 1}
        assert client.get(f"/api/users/{user}/journals").json() == []

        again = client.delete(f"/api/users/{user}/journals/{created['id']}")
        assert again.status_code == 404


class TestAppOwnsStore:
    def test_two_apps_use_their_own_files(self, tmp_path):
        first = AppConfig()
        first.database = DatabaseConfig(sqlite_path=tmp_path / "a.db")
        second = AppConfig()
        second.database = DatabaseConfig(sqlite_path=tmp_path / "b.db")
        app1 = create_app(first)
        app2 = create_app(second)

        with TestClient(app1) as c1, TestClient(app2) as c2:
            resp = c1.post("/api/users", json={"email": "a@example.com", "password": "pw"})
            assert resp.status_code == 200
            assert c1.post("/api/users/1/journals", json={
                "image": "img://a", "description": "Toast", "category": "Breakfast",
            }).status_code == 201

            assert UserRepository(app1.state.store).get_by_email("a@example.com") is not None
            assert UserRepository(app2.state.store).get_by_email("a@example.com") is None
            assert c2.get("/api/users/1/journals").json() == []
            assert len(c1.get("/api/users/1/journals").json()) == 1


class TestUserRegistrationErrors:
    def test_unique_violation_on_insert(self, client, user, monkeypatch):
        # Another request registered the same email between lookup and insert
        monkeypatch.setattr(UserRepository, "get_by_email", lambda self, email: None)
        resp = client.post("/api/users", json={"email": "eater@example.com", "password": "pw"})
        assert resp.status_code == 409

    def test_other_store_failure(self, client, monkeypatch, caplog):
        def failing_create(self, email, password=None):
            raise QueryExecutionError("disk I/O error", "INSERT INTO users")

        monkeypatch.setattr(UserRepository, "create", failing_create)
        with caplog.at_level(logging.ERROR):
            resp = client.post("/api/users", json={"email": "a@example.com", "password": "pw"})
        assert resp.status_code == 500
        assert "disk I/O error" in caplog.text
