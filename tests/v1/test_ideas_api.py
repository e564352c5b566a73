# tests/v1/test_ideas_api.py
from fastapi.testclient import TestClient


def test_idea_to_launch_flow(client: TestClient, auth_headers) -> None:
    headers = auth_headers("maker")
    idea = client.post("/api/v1/ideas/", json={"title": "Focus timer"}, headers=headers)
    assert idea.status_code == 201
    idea_id = idea.json()["id"]

    early = client.post(
        "/api/v1/launches/",
        json={
            "title": "Focus",
            "description": "Timer",
            "demo_url": "https://focus.example.com",
            "linked_idea_id": idea_id,
        },
        headers=headers,
    )
    assert early.status_code == 400
    assert early.json()["detail"] == "Only validated ideas can be linked to launches."

    validated = client.post(f"/api/v1/ideas/{idea_id}/validate", headers=headers)
    assert validated.json()["status"] == "validated"

    launched = client.post(
        "/api/v1/launches/",
        json={
            "title": "Focus",
            "description": "Timer",
            "demo_url": "https://focus.example.com",
            "linked_idea_id": idea_id,
        },
        headers=headers,
    )
    assert launched.status_code == 201
    assert client.get(f"/api/v1/ideas/{idea_id}").json()["status"] == "launched"


def test_only_author_can_validate(client: TestClient, auth_headers) -> None:
    idea_id = client.post(
        "/api/v1/ideas/", json={"title": "Focus timer"}, headers=auth_headers("maker")
    ).json()["id"]

    response = client.post(f"/api/v1/ideas/{idea_id}/validate", headers=auth_headers("other"))

    assert response.status_code == 403


def test_close_and_missing(client: TestClient, auth_headers) -> None:
    headers = auth_headers("maker")
    idea_id = client.post("/api/v1/ideas/", json={"title": "Focus timer"}, headers=headers).json()["id"]

    assert client.post(f"/api/v1/ideas/{idea_id}/close", headers=headers).json()["status"] == "closed"
    assert client.get("/api/v1/ideas/404").status_code == 404
