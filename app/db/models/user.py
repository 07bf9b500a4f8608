"""
SQLAlchemy model for the User entity.

Holds identity (unique name and email), the bcrypt password hash, profile
picture, theme preference and the optional link to the user's preference
document. Reviews written by the user hang off the `reviews` relationship.
"""

from sqlalchemy import Column, Integer, String, Enum, ForeignKey
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin
from app.db.models.enums import ThemeEnum, enum_values


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    profile_pic = Column(String(1024), nullable=True)
    theme_preference = Column(
        Enum(ThemeEnum, values_callable=enum_values, name="theme_preference"),
        default=ThemeEnum.light,
        nullable=False,
    )
    user_data_id = Column(Integer, ForeignKey("user_data.id"), nullable=True)
    # Subject id from the federated login provider
    google_id = Column(String(255), unique=True, nullable=True)

    user_data = relationship("UserData", back_populates="user", uselist=False)
    reviews = relationship("Review", back_populates="user")
