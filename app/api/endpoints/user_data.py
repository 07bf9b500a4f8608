"""
Handles a user's preference document (UserData) and the recommendations
built from it. Every route is private to the document's owner.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.db.deps import get_completion_service, get_db
from app.middleware.auth_middleware import authenticate, require_ownership
from app.models.schemas import UserDataCreate, UserDataOut, UserDataUpdate
from app.services import user_data_service
from app.services.recommendation_service import get_recommendations
from app.utils.error_handler import NotFound, ValidationError, safe_call

logger = logging.getLogger(__name__)

router = APIRouter()


def _authorize(db: Session, current_user, user_data_id: int) -> None:
    # The owner is whoever's profile points at this document
    require_ownership(current_user, user_data_service.get_owner_id(db, user_data_id))


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
@safe_call("Error creating user data")
def create_user_data(
    payload: UserDataCreate,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    if current_user.user_data_id is not None and user_data_service.get_user_data(db, current_user.user_data_id):
        raise ValidationError("User data already exists for this user")

    user_data = user_data_service.create_user_data(db, current_user, payload.model_dump())
    return {"message": "User data created successfully", "userDataId": user_data.id}


@router.get("/{user_data_id}", response_model=UserDataOut)
@safe_call("Error fetching user data")
def get_user_data(
    user_data_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    _authorize(db, current_user, user_data_id)
    user_data = user_data_service.get_user_data(db, user_data_id)
    if not user_data:
        raise NotFound("User data not found")
    return user_data


@router.put("/{user_data_id}")
@safe_call("Error updating user data")
def update_user_data(
    user_data_id: int,
    payload: UserDataUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    _authorize(db, current_user, user_data_id)
    user_data = user_data_service.get_user_data(db, user_data_id)
    if not user_data:
        raise NotFound("User data not found")
    user_data_service.update_user_data(db, user_data, payload.model_dump(exclude_unset=True))
    return {"message": "User data updated successfully"}


@router.delete("/{user_data_id}")
@safe_call("Error deleting user data")
def delete_user_data(
    user_data_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    _authorize(db, current_user, user_data_id)
    user_data_service.delete_user_data(db, user_data_id)
    return {"message": "User data deleted successfully"}


@router.get("/{user_data_id}/recommendations")
@safe_call("Error fetching recommendations")
async def get_user_recommendations(
    user_data_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
    completion=Depends(get_completion_service),
):
    await run_in_threadpool(_authorize, db, current_user, user_data_id)
    return await get_recommendations(db, user_data_id, completion)
