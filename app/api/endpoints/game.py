"""
Handles catalog endpoints: create, search, list, read, update and delete games.

Reads are public; mutations go through the authorization gate.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.deps import get_db
from app.db.models.enums import GameModeEnum
from app.middleware.auth_middleware import authenticate
from app.models.schemas import GameCreate, GameOut, GameUpdate
from app.services import game_service
from app.utils.error_handler import NotFound, safe_call

router = APIRouter()


@router.post("/create", status_code=201)
@safe_call("Error creating game")
def create_game(
    payload: GameCreate,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    game = game_service.add_game(db, payload.model_dump())
    return {"message": "Game created successfully", "game_id": game.game_id}


@router.get("/search", response_model=List[GameOut])
@safe_call("Server error")
def search_games(
    query: Optional[str] = None,
    genre: Optional[str] = None,
    review_rating: Optional[int] = None,
    game_mode: Optional[GameModeEnum] = None,
    db: Session = Depends(get_db),
):
    games = game_service.find_games(
        db,
        query=query or "",
        genres=genre or "",
        min_review_rating=review_rating or 0,
        game_mode=game_mode,
    )
    # An empty match is reported as 404, not as an empty list
    if not games:
        raise NotFound("No games found")
    return games


@router.get("/all", response_model=List[GameOut])
@safe_call("Error fetching games")
def get_all_games(limit: Optional[str] = None, db: Session = Depends(get_db)):
    try:
        parsed_limit = int(limit) if limit is not None else game_service.DEFAULT_LIMIT
    except ValueError:
        parsed_limit = game_service.DEFAULT_LIMIT

    games = game_service.get_all_games(db, parsed_limit)
    if not games:
        raise NotFound("No games found")
    return games


@router.get("/{game_id}", response_model=GameOut)
@safe_call("Error fetching game")
def get_game(game_id: int, db: Session = Depends(get_db)):
    game = game_service.get_game(db, game_id)
    if not game:
        raise NotFound("Game not found")
    return game


@router.put("/{game_id}")
@safe_call("Error updating game")
def edit_game(
    game_id: int,
    payload: GameUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    game = game_service.get_game(db, game_id)
    if not game:
        raise NotFound("Game not found")
    game_service.update_game(db, game, payload.model_dump(exclude_unset=True))
    return {"message": "Game updated successfully"}


@router.delete("/{game_id}")
@safe_call("Error deleting game")
def remove_game(
    game_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    game_service.delete_game(db, game_id)
    return {"message": "Game deleted successfully"}
