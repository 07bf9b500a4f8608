"""
Defines Pydantic models for validation of requests and responses.

Includes schemas for auth payloads, User profiles, UserData documents,
Games and Reviews.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.db.models.enums import GameModeEnum, ThemeEnum


# --- Auth -------------------------------------------------------------------

class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    profile_pic: Optional[str] = None
    theme_preference: Optional[ThemeEnum] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    password: str


class AuthStatus(BaseModel):
    loggedIn: bool
    userId: Optional[int] = None


class OAuthProfile(BaseModel):
    """What the federated login provider hands back after authentication."""

    id: str
    displayName: str
    email: Optional[str] = None
    email_verified: bool = False
    photo: Optional[str] = None


# --- Users ------------------------------------------------------------------

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    profile_pic: Optional[str] = None
    theme_preference: Optional[ThemeEnum] = None
    user_data_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=3)
    password: Optional[str] = Field(default=None, min_length=1)
    profile_pic: Optional[str] = None
    theme_preference: Optional[ThemeEnum] = None


# --- UserData ---------------------------------------------------------------

class UserDataBase(BaseModel):
    search_history: List[str] = []
    interests: List[str] = []
    view_history: List[str] = []
    review_history: List[str] = []
    genres: List[str] = []


class UserDataCreate(UserDataBase):
    pass


class UserDataUpdate(BaseModel):
    search_history: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    view_history: Optional[List[str]] = None
    review_history: Optional[List[str]] = None
    genres: Optional[List[str]] = None


class UserDataOut(UserDataBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- Games ------------------------------------------------------------------

class GameBase(BaseModel):
    description: Optional[str] = None
    genre: Optional[str] = None
    tags: Optional[List[str]] = None
    platforms: Optional[List[str]] = None
    playtime_estimate: Optional[int] = Field(default=None, ge=0)
    developer: Optional[str] = None
    publisher: Optional[str] = None
    game_mode: Optional[GameModeEnum] = None
    release_date: Optional[date] = None
    review_rating: Optional[int] = Field(default=None, ge=1, le=10)
    cover_image: Optional[str] = None


class GameCreate(GameBase):
    title: str = Field(min_length=1)


class GameUpdate(GameBase):
    title: Optional[str] = Field(default=None, min_length=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value):
        # Omit the field to keep the current title; null would blank a required column
        if value is None:
            raise ValueError("title cannot be null")
        return value


class GameOut(BaseModel):
    game_id: int
    title: str
    description: Optional[str] = None
    genre: Optional[str] = None
    tags: List[str] = []
    platforms: List[str] = []
    playtime_estimate: Optional[int] = None
    developer: Optional[str] = None
    publisher: Optional[str] = None
    game_mode: Optional[GameModeEnum] = None
    release_date: Optional[date] = None
    review_rating: Optional[int] = None
    cover_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- Reviews ----------------------------------------------------------------

class ReviewCreate(BaseModel):
    game_id: int
    rating: float
    review_text: str = Field(min_length=1)


class ReviewUpdate(BaseModel):
    rating: Optional[float] = None
    review_text: Optional[str] = Field(default=None, min_length=1)


class ReviewOut(BaseModel):
    review_id: int
    user_id: int
    game_id: int
    rating: float
    review_text: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

