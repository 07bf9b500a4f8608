"""
Creates the SQLAlchemy engine and session factory.

The Database object is built once by the application factory, opened when
the process starts and disposed at shutdown. Server and file databases get a
bounded connection pool; callers wait up to `pool_timeout` for a free
connection when it is saturated. In-memory SQLite shares one connection.
"""

# app/db/session.py
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from app.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url, pool_size=10, max_overflow=0, pool_timeout=30, echo=False):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.echo = echo
        self.engine = None
        self.SessionLocal = None

    @classmethod
    def from_settings(cls, settings):
        return cls(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            echo=settings.DB_ECHO,
        )

    @property
    def is_in_memory(self) -> bool:
        if not self.url.startswith("sqlite"):
            return False
        return self.url in ("sqlite://", "sqlite:///") or ":memory:" in self.url

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self):
        if self.is_open:
            return self
        if self.is_in_memory:
            # One shared connection, otherwise every checkout sees an empty database
            self.engine = create_engine(
                self.url,
                echo=self.echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            connect_args = {"check_same_thread": False} if self.url.startswith("sqlite") else {}
            self.engine = create_engine(
                self.url,
                echo=self.echo,
                connect_args=connect_args,
                poolclass=QueuePool,
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_timeout=self.pool_timeout,
                pool_pre_ping=True,
            )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info("Database connection pool created.")
        return self

    def create_all(self):
        # Ensure all models are registered on the metadata
        from app.db import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self):
        if not self.is_open:
            raise RuntimeError("Database is not open")
        return self.SessionLocal()

    def close(self):
        if not self.is_open:
            logger.warning("No active database pool to close.")
            return
        self.engine.dispose()
        self.engine = None
        self.SessionLocal = None
        logger.info("Database connection pool closed.")
