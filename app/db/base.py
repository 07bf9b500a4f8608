"""
Defines the SQLAlchemy declarative base class and the timestamp columns
every table carries.
"""

# app/db/base.py
from sqlalchemy import Column, TIMESTAMP
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TimestampMixin:
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
