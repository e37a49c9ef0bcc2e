"""
Router des leçons. Lecture pour tout utilisateur connecté, écriture réservée aux admins.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.dependencies import get_current_user, require_roles
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.lecture import (
    LectureCreate,
    LectureDetailResponse,
    LectureListQuery,
    LectureListResponse,
    LectureTreeResponse,
    LectureUpdate,
)
from classroom_api.services import lecture_service

router = APIRouter(
    prefix="/api/v1/lecture",
    tags=["Leçons"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=LectureListResponse, summary="Lister les leçons")
def list_lectures(query: Annotated[LectureListQuery, Query()], db: Session = Depends(get_db)):
    return lecture_service.get_lectures(db, query)


@router.get("/tree", response_model=LectureTreeResponse, summary="Arbre des leçons")
def lecture_tree(db: Session = Depends(get_db)):
    return lecture_service.get_lecture_tree(db)


@router.get("/{lecture_id}", response_model=LectureDetailResponse, summary="Détail d'une leçon")
def get_lecture(lecture_id: int, db: Session = Depends(get_db)):
    return lecture_service.get_lecture(db, lecture_id)


@router.post(
    "",
    response_model=LectureDetailResponse,
    status_code=201,
    summary="Créer une leçon",
    dependencies=[Depends(require_roles("admin"))],
)
def create_lecture(data: LectureCreate, db: Session = Depends(get_db)):
    return lecture_service.create_lecture(db, data)


@router.put(
    "/{lecture_id}",
    response_model=LectureDetailResponse,
    summary="Modifier une leçon",
    dependencies=[Depends(require_roles("admin"))],
)
def update_lecture(lecture_id: int, data: LectureUpdate, db: Session = Depends(get_db)):
    return lecture_service.update_lecture(db, lecture_id, data)


@router.delete(
    "/{lecture_id}",
    response_model=MessageResponse,
    summary="Supprimer une leçon",
    dependencies=[Depends(require_roles("admin"))],
)
def delete_lecture(lecture_id: int, db: Session = Depends(get_db)):
    return lecture_service.delete_lecture(db, lecture_id)
