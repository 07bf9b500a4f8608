"""
Main entry point for the FastAPI application.

- Builds the app around an explicitly opened and closed database
- Includes all API routers
- Adds CORS middleware and the error handlers
- Starts the catalog import scheduler
"""

# app/main.py
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core import logging_config  # noqa: F401
from app.api.router import api_router
from app.core.config import settings as default_settings
from app.db.session import Database
from app.services.oauth import GoogleOAuthProvider
from app.services.recommendation_service import OpenAICompletionService
from app.utils.error_handler import register_exception_handlers
from app.utils.scheduler import build_scheduler, start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


def create_app(settings=None, database=None, completion_service=None, oauth_provider=None,
               enable_scheduler=True):
    settings = settings or default_settings
    database = database or Database.from_settings(settings)
    completion_service = completion_service or OpenAICompletionService(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        max_tokens=settings.OPENAI_MAX_TOKENS,
    )
    oauth_provider = oauth_provider or GoogleOAuthProvider.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
        database.open()
        scheduler = build_scheduler(database, settings) if enable_scheduler else None
        if scheduler is not None:
            start_scheduler(scheduler)
        logger.info("Application started")
        try:
            yield
        finally:
            if scheduler is not None:
                stop_scheduler(scheduler)
            close = getattr(completion_service, "close", None)
            if close is not None:
                await close()
            database.close()

    app = FastAPI(title="Game Ratings Backend", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.completion_service = completion_service
    app.state.oauth_provider = oauth_provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "Cookie"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

    @app.get("/")
    async def root():
        return {"message": "The server is working"}

    return app


app = create_app()
