from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.security import hash_password, issue_token
from app.db import models
from app.db.models.enums import GameModeEnum, ThemeEnum
from app.db.session import Database
from app.main import create_app
from app.models.schemas import OAuthProfile
from app.services.oauth import OAuthError

TEST_SECRET = "testsecret"
TEST_PASSWORD = "password123"
# Hashed once at import
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)

STUB_RECOMMENDATIONS = {
    "recommendations": [
        {"game_id": 1, "title": "Test Game 1", "genre": "Action", "review_rating": 8},
        {"game_id": 3, "title": "Fortnite", "genre": "Shooter", "review_rating": 7},
    ]
}


class StubCompletionService:
    def __init__(self, payload=None, error=None):
        self.payload = payload if payload is not None else STUB_RECOMMENDATIONS
        self.error = error
        self.prompts = []

    async def recommend(self, prompt_context):
        self.prompts.append(prompt_context)
        if self.error is not None:
            raise self.error
        return self.payload


class StubOAuthProvider:
    GOOD_CODE = "good-code"

    def __init__(self, profile):
        self.profile = profile

    def authorization_url(self, state=None):
        return "https://accounts.example.com/o/oauth2/auth?client_id=test"

    async def authenticate(self, code):
        if code != self.GOOD_CODE:
            raise OAuthError("invalid_grant")
        return self.profile


def seed(db):
    db.add_all([
        models.UserData(
            id=1,
            search_history=["game1", "game2"],
            interests=["sports", "action"],
            view_history=["game1"],
            review_history=["1"],
            genres=["RPG", "Adventure"],
        ),
        models.UserData(
            id=2,
            search_history=["game3", "game4"],
            interests=["strategy", "puzzle"],
            view_history=["game3"],
            review_history=["2"],
            genres=["Puzzle", "Strategy"],
        ),
    ])
    db.flush()
    db.add_all([
        models.User(id=1, name="Test User 1", email="testuser1@example.com", password=TEST_PASSWORD_HASH,
                    theme_preference=ThemeEnum.dark, user_data_id=1),
        models.User(id=2, name="Test User 2", email="testuser2@example.com", password=TEST_PASSWORD_HASH,
                    theme_preference=ThemeEnum.light, user_data_id=2),
    ])
    db.add_all([
        models.Game(game_id=1, title="Test Game 1", description="An exciting action game.", genre="Action",
                    tags=["exploration", "indie"], platforms=["PC", "Xbox"], developer="Test Developer",
                    publisher="Test Publisher", game_mode=GameModeEnum.single_player,
                    release_date=date(2023, 1, 1), review_rating=8),
        models.Game(game_id=2, title="Test Game 2", description="A strategic puzzle game.", genre="Puzzle",
                    tags=[], platforms=["PC", "PlayStation"], developer="Another Developer",
                    publisher="Another Publisher", game_mode=GameModeEnum.multiplayer,
                    release_date=date(2023, 6, 1), review_rating=7),
        models.Game(game_id=3, title="Fortnite", description="Battle royale with building.", genre="Shooter",
                    tags=["battle royale"], platforms=["PC"], developer="Epic Games", publisher="Epic Games",
                    game_mode=GameModeEnum.multiplayer, release_date=date(2017, 7, 21), review_rating=7),
    ])
    db.flush()
    db.add_all([
        models.Review(review_id=1, user_id=1, game_id=1, rating=4, review_text="Good game"),
        models.Review(review_id=2, user_id=2, game_id=2, rating=5, review_text="Amazing puzzle game"),
    ])
    db.commit()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET=TEST_SECRET,
        COOKIE_SECURE=False,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        PUBLIC_BASE_URL="http://testserver",
        RAWG_API_KEY=None,
        OPENAI_API_KEY=None,
    )


@pytest.fixture
def database(settings):
    database = Database(settings.DATABASE_URL).open()
    database.create_all()
    db = database.session()
    try:
        seed(db)
    finally:
        db.close()
    yield database
    if database.is_open:
        database.close()


@pytest.fixture
def completion():
    return StubCompletionService()


@pytest.fixture
def oauth_provider():
    return StubOAuthProvider(
        OAuthProfile(id="google-123456", displayName="Gabe Player", email="gabe@example.com",
                     email_verified=True, photo="https://images.example.com/gabe.png")
    )


@pytest.fixture
def application(settings, database, completion, oauth_provider):
    return create_app(
        settings=settings,
        database=database,
        completion_service=completion,
        oauth_provider=oauth_provider,
        enable_scheduler=False,
    )


@pytest.fixture
def client(application):
    with TestClient(application) as c:
        yield c


@pytest.fixture
def token_for(settings):
    def _make(user_id, now=None):
        return issue_token(user_id, settings, now=now)
    return _make


@pytest.fixture
def auth_headers(token_for):
    def _make(user_id):
        return {"Cookie": f"jwt={token_for(user_id)}"}
    return _make
