"""
create_tables.py

Run this script once to create all database tables defined in SQLAlchemy models.
This uses Base.metadata.create_all against the database configured in `.env`.
"""

import logging

from app.core import logging_config  # noqa: F401
from app.core.config import settings
from app.db.session import Database

logger = logging.getLogger(__name__)


def init_db():
    database = Database.from_settings(settings).open()
    try:
        logger.info("Creating all database tables...")
        database.create_all()
        logger.info("Done.")
    finally:
        database.close()


if __name__ == "__main__":
    init_db()
