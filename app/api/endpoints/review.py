"""
Handles review endpoints. Anyone can read reviews; writing one needs a
session, and changing or deleting one needs to be its author.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.deps import get_db
from app.middleware.auth_middleware import authenticate, require_ownership
from app.models.schemas import ReviewCreate, ReviewOut, ReviewUpdate
from app.services import game_service, review_service
from app.utils.error_handler import NotFound, safe_call

router = APIRouter()


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
@safe_call("Error creating review")
def create_review(
    payload: ReviewCreate,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    if not game_service.get_game(db, payload.game_id):
        raise NotFound("Game not found")

    review = review_service.create_review(
        db,
        user_id=current_user.id,
        game_id=payload.game_id,
        rating=payload.rating,
        review_text=payload.review_text,
    )
    return {"message": "Review created successfully", "reviewId": review.review_id}


@router.get("/game/{game_id}", response_model=List[ReviewOut])
@safe_call("Error fetching reviews")
def get_reviews_by_game(game_id: int, db: Session = Depends(get_db)):
    reviews = review_service.get_reviews_for_game(db, game_id)
    if not reviews:
        raise NotFound("No reviews found for this game")
    return reviews


@router.get("/{review_id}", response_model=ReviewOut)
@safe_call("Error fetching review")
def get_review(review_id: int, db: Session = Depends(get_db)):
    review = review_service.get_review(db, review_id)
    if not review:
        raise NotFound("Review not found")
    return review


@router.put("/{review_id}")
@safe_call("Error updating review")
def update_review(
    review_id: int,
    payload: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    review = review_service.get_review(db, review_id)
    if not review:
        raise NotFound("Review not found")

    # The stored author decides, not the path parameter
    require_ownership(current_user, review.user_id)

    review_service.update_review(db, review, payload.model_dump(exclude_unset=True))
    return {"message": "Review updated successfully"}


@router.delete("/{review_id}")
@safe_call("Error deleting review")
def delete_review(
    review_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    review = review_service.get_review(db, review_id)
    if not review:
        raise NotFound("Review not found")

    require_ownership(current_user, review.user_id)

    review_service.delete_review(db, review)
    return {"message": "Review deleted successfully"}
