"""
Router du profil de l'utilisateur connecté.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.dependencies import get_current_user
from classroom_api.models.user import User
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.profile import ChangePasswordRequest, ProfileUpdate
from classroom_api.schemas.user import UserResponse
from classroom_api.services import profile_service

router = APIRouter(prefix="/api/v1/profile", tags=["Profil"])


@router.get("", response_model=UserResponse, summary="Mon profil")
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/update", response_model=UserResponse, summary="Modifier mon profil")
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return profile_service.update_profile(db, current_user, data)


@router.put("/change-password", response_model=MessageResponse, summary="Changer mon mot de passe")
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return profile_service.change_password(db, current_user, data)
