"""
Catalog queries and mutations for games.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.db.models.enums import GameModeEnum
from app.db.models.game import Game
from app.db.models.review import Review

DEFAULT_LIMIT = 50
MAX_LIMIT = 1000

# Columns a client may set; ids and timestamps are managed by the store
EDITABLE_FIELDS = (
    "title", "description", "genre", "tags", "platforms", "playtime_estimate",
    "developer", "publisher", "game_mode", "release_date", "review_rating", "cover_image",
)


def add_game(db: Session, fields: dict) -> Game:
    values = {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
    values["tags"] = list(values.get("tags") or [])
    values["platforms"] = list(values.get("platforms") or [])
    if values.get("game_mode") is None:
        values["game_mode"] = GameModeEnum.single_player
    game = Game(**values)
    db.add(game)
    db.commit()
    db.refresh(game)
    return game


def get_game(db: Session, game_id: int) -> Optional[Game]:
    return db.get(Game, game_id)


def title_exists(db: Session, title: str) -> bool:
    return db.query(Game.game_id).filter(Game.title == title).first() is not None


def find_games(db: Session, query: str = "", genres: str = "", min_review_rating: int = 0,
               game_mode=None) -> List[Game]:
    q = db.query(Game)

    if query:
        q = q.filter(Game.title.ilike(f"%{query}%"))

    if genres:
        genre_list = [g.strip() for g in genres.split(",") if g.strip()]
        if genre_list:
            q = q.filter(or_(*[Game.genre.ilike(f"%{genre}%") for genre in genre_list]))

    # A zero threshold means no rating filter
    if min_review_rating:
        q = q.filter(Game.review_rating >= min_review_rating)

    if game_mode:
        q = q.filter(Game.game_mode == game_mode)

    return q.order_by(Game.game_id).all()


def get_all_games(db: Session, limit: int = DEFAULT_LIMIT) -> List[Game]:
    if not limit or limit <= 0:
        limit = DEFAULT_LIMIT
    limit = min(limit, MAX_LIMIT)
    return db.query(Game).order_by(Game.game_id).limit(limit).all()


def update_game(db: Session, game: Game, updates: dict) -> Game:
    for key, value in updates.items():
        if key not in EDITABLE_FIELDS:
            continue
        if key in ("tags", "platforms"):
            value = list(value or [])
        setattr(game, key, value)
    db.commit()
    db.refresh(game)
    return game


def delete_game(db: Session, game_id: int) -> int:
    """Hard delete together with the game's reviews; returns rows removed (0 when absent)."""
    db.query(Review).filter(Review.game_id == game_id).delete(synchronize_session=False)
    deleted = db.query(Game).filter(Game.game_id == game_id).delete(synchronize_session=False)
    db.commit()
    return deleted
