# tests/v1/test_votes_api.py
from fastapi.testclient import TestClient

LONG_REVIEW = "Clean onboarding, fast search, and the export actually works with my tools."


def test_cast_vote_returns_weight(client: TestClient, auth_headers, make_builder, make_launch) -> None:
    make_builder("voter", tier=3)
    launch = make_launch("maker")

    response = client.post(
        f"/api/v1/launches/{launch.id}/votes",
        json={"feedback_text": LONG_REVIEW, "product_type_vote": "vitamin"},
        headers=auth_headers("voter"),
    )

    assert response.status_code == 201
    assert response.json() == {
        "success": True,
        "weight": 6,
        "multiplier": 3,
        "promotion_points": 5,
    }
    count = client.get(f"/api/v1/launches/{launch.id}/votes/count").json()
    assert count == {"count": 1, "weighted_score": 6}
    me = client.get(f"/api/v1/launches/{launch.id}/votes/me", headers=auth_headers("voter"))
    assert me.json() == {"has_voted": True}


def test_vote_rejections(client: TestClient, auth_headers, make_builder, make_launch) -> None:
    make_builder("ground", tier=0)
    make_builder("maker", tier=2)
    make_builder("voter", tier=1)
    launch = make_launch("maker")
    url = f"/api/v1/launches/{launch.id}/votes"

    low = client.post(url, json={}, headers=auth_headers("ground"))
    assert low.status_code == 400
    assert low.json()["detail"] == "You need to be at least Cadet (T1) to vote."

    own = client.post(url, json={}, headers=auth_headers("maker"))
    assert own.status_code == 400

    assert client.post(url, json={}, headers=auth_headers("voter")).status_code == 201
    duplicate = client.post(url, json={}, headers=auth_headers("voter"))
    assert duplicate.status_code == 400

    missing = client.post("/api/v1/launches/999/votes", json={}, headers=auth_headers("voter"))
    assert missing.status_code == 404


def test_invalid_product_type_is_422(client: TestClient, auth_headers, make_builder, make_launch) -> None:
    make_builder("voter", tier=1)
    launch = make_launch("maker")

    response = client.post(
        f"/api/v1/launches/{launch.id}/votes",
        json={"product_type_vote": "snack"},
        headers=auth_headers("voter"),
    )
    assert response.status_code == 422


def test_remove_vote(client: TestClient, auth_headers, make_builder, make_launch) -> None:
    make_builder("voter", tier=4)
    launch = make_launch("maker")
    url = f"/api/v1/launches/{launch.id}/votes"
    client.post(url, json={}, headers=auth_headers("voter"))

    response = client.delete(url, headers=auth_headers("voter"))

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"{url}/count").json() == {"count": 0, "weighted_score": 0}
    again = client.delete(url, headers=auth_headers("voter"))
    assert again.status_code == 404


def test_poten_launch_listed_after_heavy_vote(
    client: TestClient, auth_headers, make_builder, make_launch
) -> None:
    make_builder("captain", tier=5)
    launch = make_launch("maker")

    client.post(
        f"/api/v1/launches/{launch.id}/votes",
        json={"feedback_text": LONG_REVIEW, "visited_at": 0, "returned_at": 600_000},
        headers=auth_headers("captain"),
    )

    poten = client.get("/api/v1/launches/poten").json()
    assert [item["id"] for item in poten] == [launch.id]
    assert poten[0]["weighted_score"] == 25
    assert poten[0]["verified_feedback_count"] == 1
