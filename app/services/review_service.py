"""
Review persistence. Creating or deleting a review also keeps the author's
`review_history` in step, inside the same commit.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.db.models.review import Review
from app.db.models.user import User
from app.db.models.user_data import UserData

EDITABLE_FIELDS = ("rating", "review_text")


def _author_data(db: Session, user_id: int) -> Optional[UserData]:
    user = db.get(User, user_id)
    if not user or user.user_data_id is None:
        return None
    return db.get(UserData, user.user_data_id)


def create_review(db: Session, user_id: int, game_id: int, rating: float, review_text: str) -> Review:
    review = Review(user_id=user_id, game_id=game_id, rating=rating, review_text=review_text)
    db.add(review)
    try:
        db.flush()
        user_data = _author_data(db, user_id)
        if user_data is not None:
            user_data.review_history = list(user_data.review_history or []) + [str(review.review_id)]
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(review)
    return review


def get_review(db: Session, review_id: int) -> Optional[Review]:
    return db.get(Review, review_id)


def get_reviews_for_game(db: Session, game_id: int) -> List[Review]:
    return db.query(Review).filter(Review.game_id == game_id).order_by(Review.review_id).all()


def update_review(db: Session, review: Review, updates: dict) -> Review:
    for key, value in updates.items():
        if key in EDITABLE_FIELDS and value is not None:
            setattr(review, key, value)
    db.commit()
    db.refresh(review)
    return review


def delete_review(db: Session, review: Review) -> None:
    user_data = _author_data(db, review.user_id)
    if user_data is not None:
        review_key = str(review.review_id)
        user_data.review_history = [rid for rid in (user_data.review_history or []) if rid != review_key]
    db.delete(review)
    db.commit()
