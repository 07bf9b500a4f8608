# app/db/models/game.py
"""
SQLAlchemy model for a catalog entry.

Tags and platforms are ordered lists serialized as JSON text. Titles are
unique in practice; the RAWG import checks for an existing title before it
inserts.
"""

from sqlalchemy import Column, Integer, String, Text, Date, Enum, JSON
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin
from app.db.models.enums import GameModeEnum, enum_values


class Game(TimestampMixin, Base):
    __tablename__ = "games"

    game_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    genre = Column(String(255), nullable=True)
    tags = Column(MutableList.as_mutable(JSON), default=list, nullable=False)
    platforms = Column(MutableList.as_mutable(JSON), default=list, nullable=False)
    playtime_estimate = Column(Integer, nullable=True)  # hours
    developer = Column(String(255), nullable=True)
    publisher = Column(String(255), nullable=True)
    game_mode = Column(
        Enum(GameModeEnum, values_callable=enum_values, name="game_mode"),
        default=GameModeEnum.single_player,
        nullable=True,
    )
    release_date = Column(Date, nullable=True)
    review_rating = Column(Integer, nullable=True)  # 1-10
    cover_image = Column(String(1024), nullable=True)

    reviews = relationship("Review", back_populates="game")
