"""
Router de gestion des classes (admin uniquement).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.dependencies import require_roles
from classroom_api.schemas.classroom import (
    ClassroomCreate,
    ClassroomDetailResponse,
    ClassroomListQuery,
    ClassroomListResponse,
    ClassroomResponse,
    ClassroomUpdate,
)
from classroom_api.schemas.common import MessageResponse
from classroom_api.services import classroom_service

router = APIRouter(
    prefix="/api/v1/classroom",
    tags=["Classes"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.get("", response_model=ClassroomListResponse, summary="Lister les classes")
def list_classrooms(query: Annotated[ClassroomListQuery, Query()], db: Session = Depends(get_db)):
    return classroom_service.get_all_classrooms(db, query)


@router.get("/deleted-list", response_model=ClassroomListResponse, summary="Lister les classes supprimées")
def list_deleted_classrooms(query: Annotated[ClassroomListQuery, Query()], db: Session = Depends(get_db)):
    return classroom_service.get_deleted_classrooms(db, query)


@router.get("/{classroom_id}", response_model=ClassroomDetailResponse, summary="Détail d'une classe")
def get_classroom(classroom_id: int, db: Session = Depends(get_db)):
    """Retourne la classe avec ses demandes d'adhésion en attente et ses élèves."""
    return classroom_service.get_classroom_by_id(db, classroom_id)


@router.post("", response_model=ClassroomResponse, status_code=201, summary="Créer une classe")
def create_classroom(data: ClassroomCreate, db: Session = Depends(get_db)):
    return classroom_service.create_classroom(db, data)


@router.put("/restore/{classroom_id}", response_model=ClassroomResponse, summary="Restaurer une classe")
def restore_classroom(classroom_id: int, db: Session = Depends(get_db)):
    return classroom_service.restore_classroom(db, classroom_id)


@router.put("/{classroom_id}", response_model=ClassroomResponse, summary="Modifier une classe")
def update_classroom(classroom_id: int, data: ClassroomUpdate, db: Session = Depends(get_db)):
    return classroom_service.update_classroom(db, classroom_id, data)


@router.delete("/{classroom_id}", response_model=MessageResponse, summary="Supprimer une classe")
def delete_classroom(classroom_id: int, db: Session = Depends(get_db)):
    """Suppression logique : la classe reste restaurable."""
    return classroom_service.delete_classroom(db, classroom_id)
