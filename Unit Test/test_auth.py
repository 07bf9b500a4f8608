from datetime import datetime, timedelta, timezone

from app.db import models

LOGIN_FAILED = "User not found / password incorrect"


def test_register_creates_user_and_empty_user_data(client, database):
    res = client.post("/api/auth/register", json={
        "name": "newbie",
        "email": "newbie@example.com",
        "password": "s3cret!",
    })

    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "newbie"
    assert body["email"] == "newbie@example.com"
    assert body["theme_preference"] == "light"
    assert "password" not in body
    assert "jwt" in res.cookies

    with database.session() as db:
        user = db.get(models.User, body["id"])
        assert user.password != "s3cret!"
        assert user.user_data_id == body["user_data_id"]
        user_data = db.get(models.UserData, user.user_data_id)
        assert user_data.interests == []
        assert user_data.review_history == []


def test_register_duplicate_email_is_rejected(client):
    res = client.post("/api/auth/register", json={
        "name": "someone else",
        "email": "testuser1@example.com",
        "password": "pw",
    })
    assert res.status_code == 400
    assert res.json()["message"] == "A user with this email already exists"


def test_register_duplicate_username_is_rejected(client):
    res = client.post("/api/auth/register", json={
        "name": "Test User 1",
        "email": "fresh@example.com",
        "password": "pw",
    })
    assert res.status_code == 400
    assert res.json()["message"] == "This username is already taken"


def test_register_names_missing_fields(client):
    res = client.post("/api/auth/register", json={"name": "x"})
    assert res.status_code == 400
    assert res.json()["message"] == "Missing required fields: email, password"


def test_login_with_email_sets_cookie(client):
    res = client.post("/api/auth/login", json={"email": "testuser1@example.com", "password": "password123"})
    assert res.status_code == 200
    assert res.json() == {"id": 1, "name": "Test User 1", "email": "testuser1@example.com"}
    assert "jwt" in res.cookies
    assert "httponly" in res.headers["set-cookie"].lower()


def test_login_with_username(client):
    res = client.post("/api/auth/login", json={"name": "Test User 2", "password": "password123"})
    assert res.status_code == 200
    assert res.json()["id"] == 2


def test_login_failure_message_does_not_leak_which_part_was_wrong(client):
    wrong_password = client.post("/api/auth/login", json={"email": "testuser1@example.com", "password": "nope"})
    no_account = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "password123"})

    assert wrong_password.status_code == 401
    assert no_account.status_code == 401
    assert wrong_password.json() == no_account.json() == {"message": LOGIN_FAILED}


def test_register_then_login_round_trip(client):
    client.post("/api/auth/register", json={"name": "loop", "email": "loop@example.com", "password": "pw1"})
    res = client.post("/api/auth/login", json={"email": "loop@example.com", "password": "pw1"})
    assert res.status_code == 200
    assert res.json()["name"] == "loop"


def test_logout_clears_cookie_without_a_session(client):
    res = client.post("/api/auth/logout")
    assert res.status_code == 200
    assert res.json() == {"message": "User logged out"}
    set_cookie = res.headers["set-cookie"]
    assert set_cookie.startswith("jwt=")
    assert "Max-Age=0" in set_cookie


def test_status_without_token(client):
    res = client.get("/api/auth/status")
    assert res.status_code == 200
    assert res.json() == {"loggedIn": False, "userId": None}


def test_status_with_valid_token(client, auth_headers):
    res = client.get("/api/auth/status", headers=auth_headers(1))
    assert res.json() == {"loggedIn": True, "userId": 1}


def test_status_never_errors_on_bad_tokens(client, token_for):
    expired = token_for(1, now=datetime.now(timezone.utc) - timedelta(hours=2))
    for token in ("garbage", expired, token_for(999)):
        res = client.get("/api/auth/status", headers={"Cookie": f"jwt={token}"})
        assert res.status_code == 200
        assert res.json() == {"loggedIn": False, "userId": None}


def test_protected_route_without_token(client):
    res = client.get("/api/users/me")
    assert res.status_code == 401
    assert res.json()["message"] == "Unauthorized: No token provided"


def test_expired_token_is_rejected_on_protected_route(client, token_for):
    expired = token_for(1, now=datetime.now(timezone.utc) - timedelta(minutes=61))
    res = client.get("/api/users/me", headers={"Cookie": f"jwt={expired}"})
    assert res.status_code == 401
    assert res.json()["message"] == "Unauthorized: Invalid token"


def test_forged_token_is_rejected(client, settings):
    from app.core.config import Settings
    from app.core.security import issue_token

    forged = issue_token(1, Settings(JWT_SECRET="not-the-server-secret"))
    res = client.get("/api/users/me", headers={"Cookie": f"jwt={forged}"})
    assert res.status_code == 401
    assert res.json()["message"] == "Unauthorized: Invalid token"


def test_token_for_unknown_user_is_rejected(client, auth_headers):
    res = client.get("/api/users/me", headers=auth_headers(999))
    assert res.status_code == 401
    assert res.json()["message"] == "Unauthorized: User not found"


def test_google_login_redirects_to_provider(client):
    res = client.get("/api/auth/google", follow_redirects=False)
    assert res.status_code == 307
    assert res.headers["location"].startswith("https://accounts.example.com/")


def test_google_callback_creates_account_once(client, database):
    first = client.get("/api/auth/google/callback", params={"code": "good-code"})
    assert first.status_code == 200
    assert first.json()["email"] == "gabe@example.com"
    assert "jwt" in first.cookies

    second = client.get("/api/auth/google/callback", params={"code": "good-code"})
    assert second.json()["id"] == first.json()["id"]

    with database.session() as db:
        user = db.get(models.User, first.json()["id"])
        assert user.google_id == "google-123456"
        assert user.user_data_id is not None


def test_google_callback_links_existing_email(client, oauth_provider):
    oauth_provider.profile = oauth_provider.profile.model_copy(update={"email": "testuser2@example.com"})
    res = client.get("/api/auth/google/callback", params={"code": "good-code"})
    assert res.status_code == 200
    assert res.json()["id"] == 2


def test_google_callback_failure(client):
    res = client.get("/api/auth/google/callback", params={"code": "bad"})
    assert res.status_code == 400
    assert res.json()["message"] == "Google authentication failed"


def test_google_unverified_email_does_not_claim_existing_account(client, oauth_provider, database):
    oauth_provider.profile = oauth_provider.profile.model_copy(
        update={"id": "google-999999", "email": "testuser2@example.com", "email_verified": False}
    )
    res = client.get("/api/auth/google/callback", params={"code": "good-code"})

    assert res.status_code == 200
    assert res.json()["id"] != 2
    assert res.json()["email"] != "testuser2@example.com"
    with database.session() as db:
        assert db.get(models.User, 2).google_id is None
