"""
Configures logging across the application.

One root handler with timestamp, level and logger name. The level comes from
LOG_LEVEL; chatty third-party loggers are held at WARNING.
"""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "httpx", "apscheduler")


def configure_logging(level=None):
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()
logger = logging.getLogger(__name__)
