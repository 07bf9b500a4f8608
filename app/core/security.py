"""
Session token and password helpers.

Tokens are stateless HS256 JWTs carrying the user id and a one hour expiry.
They travel in an HTTP-only cookie; there is no server-side session table,
so clearing the cookie is the only thing logout does.
"""

# app/core/security.py
from datetime import datetime, timedelta, timezone

from fastapi import Response
from jose import JWTError, jwt
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidToken(Exception):
    """Raised when a session token is malformed, forged or expired."""


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Stored value is not a recognised hash
        return False


def issue_token(user_id: int, settings, now: datetime = None) -> str:
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not configured")
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "userId": int(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRES_MINUTES),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, settings) -> int:
    if not token or not isinstance(token, str):
        raise InvalidToken("Missing token")
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise InvalidToken(str(e)) from e

    user_id = payload.get("userId")
    try:
        return int(user_id)
    except (TypeError, ValueError):
        raise InvalidToken("Token does not carry a user id")


def set_token_cookie(response: Response, token: str, settings) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.JWT_EXPIRES_MINUTES * 60,
    )


def clear_token_cookie(response: Response, settings) -> None:
    # Stateless tokens: a copy captured before this call stays valid until it expires
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value="",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=0,
        expires=0,
    )
