"""
Combines and registers all API endpoint routers.

This keeps routing modular and clean.
"""

# app/api/router.py
from fastapi import APIRouter
from .endpoints import auth, game, review, user, user_data

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(user.router, prefix="/users", tags=["Users"])
api_router.include_router(game.router, prefix="/games", tags=["Games"])
api_router.include_router(review.router, prefix="/reviews", tags=["Reviews"])
api_router.include_router(user_data.router, prefix="/userdata", tags=["UserData"])
