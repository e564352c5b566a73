# tests/v1/test_posts_api.py
from fastapi.testclient import TestClient


def _create(client: TestClient, headers, board_type: str = "launch_week"):
    return client.post(
        "/api/v1/posts/",
        json={"board_type": board_type, "title": "Week one recap", "content": "We shipped."},
        headers=headers,
    )


def test_create_and_fetch_post(client: TestClient, auth_headers) -> None:
    response = _create(client, auth_headers("author"))

    assert response.status_code == 201
    post = response.json()
    assert post["author_username"] == "author"
    assert post["is_poten"] is False

    fetched = client.get(f"/api/v1/posts/{post['id']}")
    assert fetched.status_code == 200
    board = client.get("/api/v1/posts/board/launch_week").json()
    assert [item["id"] for item in board] == [post["id"]]


def test_posts_by_author(client: TestClient, auth_headers) -> None:
    first = _create(client, auth_headers("author")).json()
    second = _create(client, auth_headers("author")).json()
    _create(client, auth_headers("someone_else"))

    response = client.get("/api/v1/posts/user/author")

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [second["id"], first["id"]]
    assert client.get("/api/v1/posts/user/nobody").json() == []


def test_tier_gated_board(client: TestClient, auth_headers) -> None:
    response = _create(client, auth_headers("author"), board_type="vip_lounge")

    assert response.status_code == 400
    assert response.json()["detail"] == "You need tier 6 or higher to post in this board."


def test_unknown_board(client: TestClient, auth_headers) -> None:
    response = _create(client, auth_headers("author"), board_type="memes")
    assert response.status_code == 400


def test_vote_toggle(client: TestClient, auth_headers) -> None:
    post_id = _create(client, auth_headers("author")).json()["id"]
    headers = auth_headers("fan")

    up = client.post(f"/api/v1/posts/{post_id}/upvote", headers=headers)
    assert up.json() == {"action": "upvoted", "upvotes": 1, "downvotes": 0, "is_poten": False}
    assert client.get(f"/api/v1/posts/{post_id}/vote", headers=headers).json() == {"vote_type": "up"}

    down = client.post(f"/api/v1/posts/{post_id}/downvote", headers=headers)
    assert down.json()["action"] == "changed"

    removed = client.post(f"/api/v1/posts/{post_id}/downvote", headers=headers)
    assert removed.json()["action"] == "removed"
    assert client.get(f"/api/v1/posts/{post_id}/vote", headers=headers).json() == {"vote_type": None}


def test_ten_net_upvotes_make_a_poten_post(client: TestClient, auth_headers) -> None:
    post_id = _create(client, auth_headers("author")).json()["id"]

    for index in range(10):
        response = client.post(f"/api/v1/posts/{post_id}/upvote", headers=auth_headers(f"fan{index}"))

    assert response.json()["is_poten"] is True
    poten = client.get("/api/v1/posts/poten").json()
    assert [item["id"] for item in poten] == [post_id]


def test_delete_post(client: TestClient, auth_headers) -> None:
    post_id = _create(client, auth_headers("author")).json()["id"]

    forbidden = client.delete(f"/api/v1/posts/{post_id}", headers=auth_headers("intruder"))
    assert forbidden.status_code == 403

    deleted = client.delete(f"/api/v1/posts/{post_id}", headers=auth_headers("author"))
    assert deleted.status_code == 204
    assert client.get(f"/api/v1/posts/{post_id}").status_code == 404
