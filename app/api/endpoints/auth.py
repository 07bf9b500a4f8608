"""
Handles authentication endpoints: register, login, logout, status and the
Google federated login redirect/callback.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.security import (
    InvalidToken,
    clear_token_cookie,
    issue_token,
    set_token_cookie,
    verify_token,
)
from app.db.deps import get_db, get_oauth_provider, get_settings
from app.models.schemas import AuthStatus, LoginRequest, RegisterRequest, UserOut, UserSummary
from app.services import user_service
from app.services.oauth import OAuthError
from app.utils.error_handler import Unauthorized, ValidationError, safe_call

logger = logging.getLogger(__name__)

router = APIRouter()

LOGIN_FAILED = "User not found / password incorrect"


@router.post("/register", status_code=201, response_model=UserOut,
             response_model_exclude={"created_at"})
@safe_call("Error registering user")
def register(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings=Depends(get_settings),
):
    user = user_service.register_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        profile_pic=payload.profile_pic,
        theme_preference=payload.theme_preference,
        default_profile_pic=settings.DEFAULT_PROFILE_PIC,
    )
    set_token_cookie(response, issue_token(user.id, settings), settings)
    return user


@router.post("/login", response_model=UserSummary)
@safe_call("Error logging in")
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings=Depends(get_settings),
):
    if not payload.email and not payload.name:
        raise ValidationError("Missing required fields: email or name")

    user = user_service.authenticate_user(db, payload.password, email=payload.email, name=payload.name)
    if not user:
        # Same answer for unknown account and wrong password
        raise Unauthorized(LOGIN_FAILED)

    set_token_cookie(response, issue_token(user.id, settings), settings)
    return user


@router.post("/logout")
async def logout(response: Response, settings=Depends(get_settings)):
    clear_token_cookie(response, settings)
    return {"message": "User logged out"}


@router.get("/status", response_model=AuthStatus)
def auth_status(request: Request, db: Session = Depends(get_db), settings=Depends(get_settings)):
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token or not settings.JWT_SECRET:
        return AuthStatus(loggedIn=False, userId=None)

    try:
        user = user_service.find_by_id(db, verify_token(token, settings))
    except InvalidToken:
        return AuthStatus(loggedIn=False, userId=None)
    except Exception as e:
        logger.exception("Status check failed: %s", e)
        return AuthStatus(loggedIn=False, userId=None)

    if user:
        return AuthStatus(loggedIn=True, userId=user.id)
    return AuthStatus(loggedIn=False, userId=None)


@router.get("/google")
async def google_login(provider=Depends(get_oauth_provider)):
    try:
        return RedirectResponse(provider.authorization_url())
    except OAuthError as e:
        logger.error("Google login unavailable: %s", e)
        raise ValidationError("Google authentication failed")


@router.get("/google/callback", response_model=UserSummary)
@safe_call("Google authentication failed")
async def google_callback(
    response: Response,
    code: str = None,
    db: Session = Depends(get_db),
    settings=Depends(get_settings),
    provider=Depends(get_oauth_provider),
):
    try:
        profile = await provider.authenticate(code)
    except OAuthError as e:
        logger.warning("Authentication error or no user: %s", e)
        raise ValidationError("Google authentication failed")

    user = await run_in_threadpool(user_service.get_or_create_oauth_user, db, profile)
    set_token_cookie(response, issue_token(user.id, settings), settings)
    return user
