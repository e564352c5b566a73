# tests/v1/test_leaderboard_api.py
from fastapi.testclient import TestClient


def _analysis(username: str, rating: float) -> dict:
    return {
        "username": username,
        "overall_rating": rating,
        "tier": "A",
        "archetype_id": "shipper",
        "top_language": "Python",
    }


def test_snapshot_is_null_before_rebuild(client: TestClient) -> None:
    assert client.get("/api/v1/leaderboard/snapshot").json() is None
    assert client.get("/api/v1/leaderboard/rank", params={"rating": 50}).json() == {
        "rank": None,
        "total": 0,
        "percentile": None,
    }


def test_rebuild_without_analyses(client: TestClient, auth_headers) -> None:
    response = client.post("/api/v1/leaderboard/rebuild", headers=auth_headers("cron"))
    assert response.status_code == 404


def test_rebuild_and_rank(client: TestClient, auth_headers) -> None:
    headers = auth_headers("cron")
    for index, rating in enumerate([80, 84, 86, 88, 92, 97]):
        saved = client.post(
            "/api/v1/leaderboard/analyses", json=_analysis(f"dev{index}", rating), headers=headers
        )
        assert saved.status_code == 201

    rebuilt = client.post("/api/v1/leaderboard/rebuild", headers=headers)
    assert rebuilt.status_code == 200
    assert rebuilt.json()["total_users"] == 6
    assert rebuilt.json()["top_users"][0]["username"] == "dev5"

    rank = client.get("/api/v1/leaderboard/rank", params={"rating": 85}).json()
    assert rank == {"rank": 5, "total": 6, "percentile": 33}


def test_rating_out_of_range(client: TestClient) -> None:
    response = client.get("/api/v1/leaderboard/rank", params={"rating": 101})
    assert response.status_code == 422
