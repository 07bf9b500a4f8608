"""
Preference document (UserData) persistence and owner resolution.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.db.models.user import User
from app.db.models.user_data import LIST_FIELDS, UserData


def get_owner_id(db: Session, user_data_id: int) -> Optional[int]:
    """Id of the user whose profile points at this document, if any."""
    row = db.query(User.id).filter(User.user_data_id == user_data_id).first()
    return row[0] if row else None


def get_user_data(db: Session, user_data_id: int) -> Optional[UserData]:
    return db.get(UserData, user_data_id)


def create_user_data(db: Session, owner: User, fields: dict) -> UserData:
    user_data = UserData(**{key: list(fields.get(key) or []) for key in LIST_FIELDS})
    db.add(user_data)
    try:
        db.flush()
        owner.user_data_id = user_data.id
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user_data)
    return user_data


def update_user_data(db: Session, user_data: UserData, updates: dict) -> UserData:
    for key, value in updates.items():
        if key in LIST_FIELDS and value is not None:
            setattr(user_data, key, list(value))
    db.commit()
    db.refresh(user_data)
    return user_data


def delete_user_data(db: Session, user_data_id: int) -> int:
    # Detach the owner first so the foreign key never dangles
    db.query(User).filter(User.user_data_id == user_data_id).update(
        {User.user_data_id: None}, synchronize_session=False
    )
    deleted = db.query(UserData).filter(UserData.id == user_data_id).delete(synchronize_session=False)
    db.commit()
    return deleted
