import pytest

from app.db import models
from conftest import STUB_RECOMMENDATIONS


@pytest.mark.parametrize("method, path", [
    ("GET", "/api/userdata/1"),
    ("PUT", "/api/userdata/1"),
    ("DELETE", "/api/userdata/1"),
    ("GET", "/api/userdata/1/recommendations"),
])
def test_other_users_are_forbidden(client, auth_headers, database, method, path):
    kwargs = {"json": {"interests": ["hijacked"]}} if method == "PUT" else {}
    res = client.request(method, path, headers=auth_headers(2), **kwargs)

    assert res.status_code == 403
    assert res.json()["message"] == "Forbidden: Access denied"
    with database.session() as db:
        user_data = db.get(models.UserData, 1)
        assert user_data is not None
        assert user_data.interests == ["sports", "action"]


@pytest.mark.parametrize("method, path", [
    ("GET", "/api/userdata/1"),
    ("DELETE", "/api/userdata/1"),
    ("GET", "/api/userdata/1/recommendations"),
])
def test_requires_session(client, method, path):
    res = client.request(method, path)
    assert res.status_code == 401


def test_owner_reads_own_document(client, auth_headers):
    res = client.get("/api/userdata/1", headers=auth_headers(1))
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == 1
    assert body["interests"] == ["sports", "action"]
    assert body["genres"] == ["RPG", "Adventure"]


def test_owner_updates_only_given_fields(client, auth_headers, database):
    res = client.put("/api/userdata/1", headers=auth_headers(1), json={"interests": ["racing"]})
    assert res.status_code == 200
    assert res.json()["message"] == "User data updated successfully"

    with database.session() as db:
        user_data = db.get(models.UserData, 1)
        assert user_data.interests == ["racing"]
        assert user_data.genres == ["RPG", "Adventure"]


def test_create_is_refused_while_a_document_exists(client, auth_headers):
    res = client.post("/api/userdata", headers=auth_headers(1), json={"interests": ["x"]})
    assert res.status_code == 400
    assert res.json()["message"] == "User data already exists for this user"


def test_delete_then_recreate(client, auth_headers, database):
    res = client.delete("/api/userdata/1", headers=auth_headers(1))
    assert res.status_code == 200
    assert res.json()["message"] == "User data deleted successfully"

    with database.session() as db:
        assert db.get(models.UserData, 1) is None
        assert db.get(models.User, 1).user_data_id is None

    res = client.post("/api/userdata", headers=auth_headers(1), json={"genres": ["Racing"]})
    assert res.status_code == 201
    new_id = res.json()["userDataId"]

    res = client.get(f"/api/userdata/{new_id}", headers=auth_headers(1))
    assert res.status_code == 200
    assert res.json()["genres"] == ["Racing"]
    assert res.json()["interests"] == []


def test_recommendations_pass_through_unmodified(client, auth_headers, completion):
    res = client.get("/api/userdata/1/recommendations", headers=auth_headers(1))

    assert res.status_code == 200
    assert res.json() == STUB_RECOMMENDATIONS
    assert len(completion.prompts) == 1
    prompt = completion.prompts[0]
    assert '"sports, action"' in prompt
    assert '"RPG, Adventure"' in prompt


def test_recommendation_failure_is_a_generic_500(client, auth_headers, completion):
    completion.error = RuntimeError("upstream exploded")
    res = client.get("/api/userdata/1/recommendations", headers=auth_headers(1))

    assert res.status_code == 500
    assert res.json() == {"message": "Error fetching recommendations"}
