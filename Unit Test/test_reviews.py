import pytest

from app.db import models

REVIEW = {"game_id": 1, "rating": 4, "review_text": "Great game!"}


def count_reviews(database):
    with database.session() as db:
        return db.query(models.Review).count()


def test_create_review_when_authenticated(client, auth_headers, database):
    res = client.post("/api/reviews", headers=auth_headers(1), json=REVIEW)

    assert res.status_code == 201
    assert res.json()["message"] == "Review created successfully"
    review_id = res.json()["reviewId"]

    with database.session() as db:
        review = db.get(models.Review, review_id)
        assert review.review_text == "Great game!"
        assert review.user_id == 1
        assert db.get(models.UserData, 1).review_history == ["1", str(review_id)]


def test_create_review_without_session_writes_nothing(client, database):
    before = count_reviews(database)
    res = client.post("/api/reviews", json=REVIEW)
    assert res.status_code == 401
    assert res.json()["message"] == "Unauthorized: No token provided"
    assert count_reviews(database) == before


def test_create_review_names_missing_fields(client, auth_headers):
    res = client.post("/api/reviews", headers=auth_headers(1), json={"game_id": 1})
    assert res.status_code == 400
    assert res.json()["message"] == "Missing required fields: rating, review_text"


def test_create_review_for_unknown_game(client, auth_headers):
    res = client.post("/api/reviews", headers=auth_headers(1), json={**REVIEW, "game_id": 999})
    assert res.status_code == 404


def test_fetch_review_by_id(client):
    res = client.get("/api/reviews/1")
    assert res.status_code == 200
    body = res.json()
    assert body["review_id"] == 1
    assert body["rating"] == 4
    assert body["review_text"] == "Good game"


def test_fetch_missing_review(client):
    assert client.get("/api/reviews/999").status_code == 404


def test_fetch_reviews_for_game(client):
    res = client.get("/api/reviews/game/2")
    assert res.status_code == 200
    assert [r["review_id"] for r in res.json()] == [2]

    res = client.get("/api/reviews/game/3")
    assert res.status_code == 404
    assert res.json()["message"] == "No reviews found for this game"


def test_update_own_review(client, auth_headers, database):
    res = client.put("/api/reviews/1", headers=auth_headers(1), json={"rating": 5, "review_text": "Excellent game!"})
    assert res.status_code == 200
    assert res.json()["message"] == "Review updated successfully"

    with database.session() as db:
        review = db.get(models.Review, 1)
        assert review.rating == 5
        assert review.review_text == "Excellent game!"


def test_update_cannot_change_author_or_game(client, auth_headers, database):
    client.put("/api/reviews/1", headers=auth_headers(1), json={"user_id": 2, "game_id": 3, "rating": 3})
    with database.session() as db:
        review = db.get(models.Review, 1)
        assert (review.user_id, review.game_id, review.rating) == (1, 1, 3)


@pytest.mark.parametrize("method", ["put", "delete"])
def test_other_users_cannot_touch_review(client, auth_headers, database, method):
    created = client.post("/api/reviews", headers=auth_headers(1), json=REVIEW).json()["reviewId"]

    kwargs = {"json": {"rating": 1}} if method == "put" else {}
    res = client.request(method.upper(), f"/api/reviews/{created}", headers=auth_headers(2), **kwargs)
    assert res.status_code == 403
    assert res.json()["message"] == "Forbidden: Access denied"

    res = client.request(method.upper(), f"/api/reviews/{created}", headers=auth_headers(1), **kwargs)
    assert res.status_code == 200


def test_review_mutations_need_a_session(client):
    assert client.put("/api/reviews/1", json={"rating": 5}).status_code == 401
    assert client.delete("/api/reviews/1").status_code == 401


def test_delete_own_review(client, auth_headers, database):
    res = client.delete("/api/reviews/1", headers=auth_headers(1))
    assert res.status_code == 200
    assert res.json()["message"] == "Review deleted successfully"

    with database.session() as db:
        assert db.get(models.Review, 1) is None
        assert db.get(models.UserData, 1).review_history == []


def test_mutating_missing_review(client, auth_headers):
    assert client.put("/api/reviews/999", headers=auth_headers(1), json={"rating": 1}).status_code == 404
    assert client.delete("/api/reviews/999", headers=auth_headers(1)).status_code == 404
