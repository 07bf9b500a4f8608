"""
seed_data.py

Seeds a development database with demo users, their preference documents,
a few catalog games and reviews. Pass --rawg to also import the most popular
games from RAWG (needs RAWG_API_KEY).
"""

import argparse
import asyncio
import logging
from datetime import date

from sqlalchemy.orm import Session

from app.core import logging_config  # noqa: F401
from app.core.config import settings
from app.core.security import hash_password
from app.db import models
from app.db.models.enums import GameModeEnum, ThemeEnum
from app.db.session import Database
from app.services.rawg import RawgClient, add_new_games_to_database
from app.services.user_service import create_user_with_data

logger = logging.getLogger(__name__)


def seed_users(db: Session):
    if db.query(models.User).count() == 0:
        for name, email, theme, interests, genres in (
            ("Alex", "alex@example.com", ThemeEnum.dark, ["open world", "co-op"], ["RPG", "Adventure"]),
            ("Sam", "sam@example.com", ThemeEnum.light, ["strategy", "puzzle"], ["Puzzle", "Strategy"]),
        ):
            user = create_user_with_data(
                db,
                name=name,
                email=email,
                password=hash_password("password123"),
                theme_preference=theme,
            )
            user.user_data.interests = interests
            user.user_data.genres = genres
            db.commit()
            logger.info("Seeded user: %s", user.name)


def seed_games(db: Session):
    if db.query(models.Game).count() == 0:
        games = [
            models.Game(
                title="Hades",
                description="Battle out of the underworld in this rogue-like dungeon crawler.",
                genre="Roguelike",
                tags=["action", "mythology"],
                platforms=["PC", "Nintendo Switch"],
                playtime_estimate=22,
                developer="Supergiant Games",
                publisher="Supergiant Games",
                game_mode=GameModeEnum.single_player,
                release_date=date(2020, 9, 17),
                review_rating=9,
            ),
            models.Game(
                title="Stardew Valley",
                description="Build the farm of your dreams.",
                genre="Simulation",
                tags=["farming", "cozy"],
                platforms=["PC", "Xbox", "PlayStation"],
                playtime_estimate=50,
                developer="ConcernedApe",
                publisher="ConcernedApe",
                game_mode=GameModeEnum.both,
                release_date=date(2016, 2, 26),
                review_rating=9,
            ),
            models.Game(
                title="Fortnite",
                description="Battle royale with building.",
                genre="Shooter",
                tags=["battle royale", "building"],
                platforms=["PC", "Xbox", "PlayStation"],
                developer="Epic Games",
                publisher="Epic Games",
                game_mode=GameModeEnum.multiplayer,
                release_date=date(2017, 7, 21),
                review_rating=7,
            ),
        ]
        db.add_all(games)
        db.commit()
        logger.info("Seeded %d games.", len(games))


def seed_reviews(db: Session):
    if db.query(models.Review).count() == 0:
        user = db.query(models.User).order_by(models.User.id).first()
        game = db.query(models.Game).order_by(models.Game.game_id).first()
        if user and game:
            db.add(models.Review(user_id=user.id, game_id=game.game_id, rating=9, review_text="Good game"))
            db.commit()
            logger.info("Seeded a review for %s", game.title)


async def seed_from_rawg(db: Session, limit=100):
    client = RawgClient(settings.RAWG_API_KEY)
    games = await client.get_most_popular_games(limit)
    return add_new_games_to_database(db, games)


def main():
    parser = argparse.ArgumentParser(description="Seed the game ratings database")
    parser.add_argument("--rawg", action="store_true", help="also import popular games from RAWG")
    args = parser.parse_args()

    database = Database.from_settings(settings).open()
    database.create_all()
    db = database.session()
    try:
        seed_users(db)
        seed_games(db)
        seed_reviews(db)
        if args.rawg:
            asyncio.run(seed_from_rawg(db))
    finally:
        db.close()
        database.close()


if __name__ == "__main__":
    main()
