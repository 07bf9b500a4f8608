"""
Authorization gate and ownership check.

`authenticate` is attached as a dependency to every protected route. It reads
the session cookie, verifies it, loads the user and stores it on
`request.state.user`. `verify_ownership` is the one predicate every private
resource handler calls before it reads or mutates.
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.security import InvalidToken, verify_token
from app.db.deps import get_db, get_settings
from app.db.models.user import User
from app.utils.error_handler import Forbidden, Unauthorized, UpstreamError

logger = logging.getLogger(__name__)


def authenticate(
    request: Request,
    db: Session = Depends(get_db),
    settings=Depends(get_settings),
) -> User:
    if not settings.JWT_SECRET:
        logger.error("JWT_SECRET is not set in the environment variables")
        raise UpstreamError("Server error: Missing secret key")

    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise Unauthorized("Unauthorized: No token provided")

    try:
        user_id = verify_token(token, settings)
    except InvalidToken as e:
        logger.warning("Rejected session token: %s", e)
        raise Unauthorized("Unauthorized: Invalid token")

    user = db.get(User, user_id)
    if not user:
        logger.warning("User not found for ID: %s", user_id)
        raise Unauthorized("Unauthorized: User not found")

    request.state.user = user
    return user


def verify_ownership(identity, resource_owner_id) -> bool:
    """True when the authenticated identity owns the resource."""
    if identity is None or resource_owner_id is None:
        return False
    return identity.id == int(resource_owner_id)


def require_ownership(identity, resource_owner_id) -> None:
    if not verify_ownership(identity, resource_owner_id):
        raise Forbidden("Forbidden: Access denied")
