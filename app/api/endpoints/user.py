"""
Handles user profile endpoints. The whole router sits behind the
authorization gate; only the owner may edit a profile.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.db.deps import get_db, get_settings
from app.middleware.auth_middleware import authenticate, require_ownership
from app.models.schemas import UserOut, UserUpdate
from app.services import user_service
from app.services.storage import UnsupportedUpload, save_profile_picture
from app.utils.error_handler import NotFound, ValidationError, safe_call

router = APIRouter(dependencies=[Depends(authenticate)])


@router.get("/me", response_model=UserOut)
@safe_call()
def get_me(db: Session = Depends(get_db), current_user=Depends(authenticate)):
    user = user_service.find_by_id(db, current_user.id)
    if not user:
        raise NotFound("User not found")
    return user


@router.put("/me/profile-picture")
@safe_call("Failed to upload profile picture.")
async def update_profile_picture(
    profilePic: UploadFile = File(...),
    db: Session = Depends(get_db),
    settings=Depends(get_settings),
    current_user=Depends(authenticate),
):
    try:
        image_url = await save_profile_picture(profilePic, settings.UPLOAD_DIR, settings.PUBLIC_BASE_URL)
    except UnsupportedUpload as e:
        raise ValidationError(str(e))

    await run_in_threadpool(user_service.update_profile_picture, db, current_user.id, image_url)
    return {"message": "Profile picture uploaded successfully!", "imageUrl": image_url}


@router.get("/email/{email}", response_model=UserOut)
@safe_call()
def get_user_by_email(email: str, db: Session = Depends(get_db)):
    user = user_service.find_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    return user


@router.get("/username/{name}", response_model=UserOut)
@safe_call()
def get_user_by_username(name: str, db: Session = Depends(get_db)):
    user = user_service.find_by_username(db, name)
    if not user:
        raise NotFound("User not found")
    return user


@router.get("/{user_id}", response_model=UserOut)
@safe_call()
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = user_service.find_by_id(db, user_id)
    if not user:
        raise NotFound("User not found")
    return user


@router.put("/{user_id}", response_model=UserOut)
@safe_call("Error updating user")
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(authenticate),
):
    require_ownership(current_user, user_id)
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    return user_service.update_user(db, current_user, updates)
