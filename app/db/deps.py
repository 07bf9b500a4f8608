"""
Provides dependencies for FastAPI routes: a per-request DB session, the
application settings and the external service clients on app.state.

Ensures the session is opened and closed cleanly per request.
"""


from typing import Generator
from fastapi import Request
from sqlalchemy.orm import Session


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request):
    return request.app.state.settings


def get_completion_service(request: Request):
    return request.app.state.completion_service


def get_oauth_provider(request: Request):
    return request.app.state.oauth_provider
