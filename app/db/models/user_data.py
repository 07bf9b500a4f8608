"""
SQLAlchemy model for a user's preference document.

Each list column is stored as JSON text and keeps its element order.
Created empty at registration and read by the recommendation proxy.
"""

from sqlalchemy import Column, Integer, JSON
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin

LIST_FIELDS = ("search_history", "interests", "view_history", "review_history", "genres")


class UserData(TimestampMixin, Base):
    __tablename__ = "user_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    search_history = Column(MutableList.as_mutable(JSON), default=list, nullable=False)
    interests = Column(MutableList.as_mutable(JSON), default=list, nullable=False)
    view_history = Column(MutableList.as_mutable(JSON), default=list, nullable=False)
    review_history = Column(MutableList.as_mutable(JSON), default=list, nullable=False)  # review ids as strings
    genres = Column(MutableList.as_mutable(JSON), default=list, nullable=False)

    user = relationship("User", back_populates="user_data", uselist=False)
