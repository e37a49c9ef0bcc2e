"""
Router d'administration des utilisateurs (admin uniquement).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.dependencies import require_roles
from classroom_api.schemas.user import UserListQuery, UserListResponse, UserResponse
from classroom_api.services import user_service

router = APIRouter(
    prefix="/api/v1/user",
    tags=["Utilisateurs"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.get("", response_model=UserListResponse, summary="Lister les utilisateurs")
def list_users(query: Annotated[UserListQuery, Query()], db: Session = Depends(get_db)):
    """Liste paginée, recherche sur nom, email et téléphone, filtre is_active."""
    return user_service.get_all_users(db, query)


@router.get("/{user_id}", response_model=UserResponse, summary="Détail d'un utilisateur")
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.put("/deactivate/{user_id}", response_model=UserResponse, summary="Désactiver un utilisateur")
def deactivate_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.deactivate_user(db, user_id)


@router.put("/activate/{user_id}", response_model=UserResponse, summary="Réactiver un utilisateur")
def activate_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.activate_user(db, user_id)
