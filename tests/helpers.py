# tests/helpers.py

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient


def future(days: int = 365) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, username: str, password: str = "secret1") -> dict:
    """Register `username` (email derived from it) and return the response data."""
    resp = client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@x.com", "password": password},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    data["headers"] = auth_headers(data["tokens"]["accessToken"])
    return data


def create_category(client: TestClient, headers: dict, name: str, **extra) -> dict:
    resp = client.post("/api/categories", json={"name": name, **extra}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["category"]


def create_task(client: TestClient, headers: dict, title: str, **extra) -> dict:
    resp = client.post("/api/tasks", json={"title": title, **extra}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["task"]


def get_category(client: TestClient, headers: dict, category_id: str) -> dict:
    resp = client.get(f"/api/categories/{category_id}", headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]["category"]
