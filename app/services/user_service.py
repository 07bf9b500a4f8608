"""
User account operations: lookups, registration, credential checks,
profile updates and federated-login account mapping.
"""

import logging
import secrets

from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password
from app.db.models.enums import ThemeEnum
from app.db.models.user import User
from app.db.models.user_data import UserData
from app.utils.error_handler import Conflict, NotFound

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "A user with this email already exists"
NAME_TAKEN = "This username is already taken"


def find_by_id(db: Session, user_id: int):
    return db.get(User, user_id)


def find_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def find_by_username(db: Session, name: str):
    return db.query(User).filter(User.name == name).first()


def find_by_google_id(db: Session, google_id: str):
    return db.query(User).filter(User.google_id == google_id).first()


def empty_user_data() -> UserData:
    return UserData(
        search_history=[],
        interests=[],
        view_history=[],
        review_history=[],
        genres=[],
    )


def create_user_with_data(db: Session, **fields) -> User:
    """Insert an empty UserData document and the User pointing at it in one transaction."""
    user_data = empty_user_data()
    db.add(user_data)
    try:
        db.flush()
        user = User(user_data_id=user_data.id, **fields)
        db.add(user)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    return user


def register_user(db: Session, name, email, password, profile_pic=None, theme_preference=None,
                  default_profile_pic=None) -> User:
    # Two lookups so the client learns which field collided
    if find_by_email(db, email):
        raise Conflict(EMAIL_TAKEN)
    if find_by_username(db, name):
        raise Conflict(NAME_TAKEN)

    user = create_user_with_data(
        db,
        name=name,
        email=email,
        password=hash_password(password),
        profile_pic=profile_pic or default_profile_pic,
        theme_preference=theme_preference or ThemeEnum.light,
    )
    logger.info("Registered user %s (id=%s)", user.name, user.id)
    return user


def authenticate_user(db: Session, password: str, email: str = None, name: str = None):
    """Return the user when the credentials match, otherwise None."""
    if email:
        user = find_by_email(db, email)
    elif name:
        user = find_by_username(db, name)
    else:
        user = None

    if user and verify_password(password, user.password):
        return user
    return None


def update_user(db: Session, user: User, updates: dict) -> User:
    new_email = updates.get("email")
    if new_email and new_email != user.email:
        other = find_by_email(db, new_email)
        if other and other.id != user.id:
            raise Conflict(EMAIL_TAKEN)

    new_name = updates.get("name")
    if new_name and new_name != user.name:
        other = find_by_username(db, new_name)
        if other and other.id != user.id:
            raise Conflict(NAME_TAKEN)

    for key, value in updates.items():
        if key == "password":
            value = hash_password(value)
        setattr(user, key, value)

    db.commit()
    db.refresh(user)
    return user


def update_profile_picture(db: Session, user_id: int, profile_pic_url: str) -> User:
    user = find_by_id(db, user_id)
    if not user:
        raise NotFound("User not found")
    user.profile_pic = profile_pic_url
    db.commit()
    db.refresh(user)
    return user


def get_or_create_oauth_user(db: Session, profile) -> User:
    """Map an external profile onto a local account, creating it on first login."""
    user = find_by_google_id(db, profile.id)
    if user:
        return user

    # Only a provider-verified address may claim an existing account
    email = profile.email if profile.email_verified else None
    if email:
        user = find_by_email(db, email)
        if user:
            user.google_id = profile.id
            if not user.profile_pic and profile.photo:
                user.profile_pic = profile.photo
            db.commit()
            db.refresh(user)
            return user

    name = profile.displayName or "player"
    if find_by_username(db, name):
        name = f"{name}-{profile.id[-6:]}"

    user = create_user_with_data(
        db,
        name=name,
        email=email or f"{profile.id}@users.noreply.google",
        # Federated accounts get a random secret nobody knows
        password=hash_password(secrets.token_urlsafe(32)),
        profile_pic=profile.photo,
        theme_preference=ThemeEnum.light,
        google_id=profile.id,
    )
    logger.info("Created account %s from federated login", user.id)
    return user
