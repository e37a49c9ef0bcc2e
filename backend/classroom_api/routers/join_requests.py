"""
Router des demandes d'adhésion et des vues élève des classes.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.dependencies import require_roles
from classroom_api.models.user import User
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.join_request import (
    JoinedClassroomResponse,
    JoinRequestCreate,
    JoinRequestListQuery,
    JoinRequestListResponse,
    JoinRequestResponse,
    LeaveClassroomRequest,
    StudentClassroomResponse,
)
from classroom_api.services import join_request_service

router = APIRouter(prefix="/api/v1/join-request", tags=["Demandes d'adhésion"])


@router.get("", response_model=JoinRequestListResponse, summary="Lister les demandes d'adhésion")
def list_join_requests(
    query: Annotated[JoinRequestListQuery, Query()],
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    return join_request_service.list_join_requests(db, query)


@router.get("/classrooms", response_model=List[StudentClassroomResponse], summary="Classes disponibles")
def student_view_classrooms(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    """Toutes les classes actives avec l'état d'adhésion de l'élève connecté."""
    return join_request_service.student_view_classrooms(db, current_user.id)


@router.get("/joined-classrooms", response_model=List[JoinedClassroomResponse], summary="Mes classes")
def student_view_joined_classrooms(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return join_request_service.student_view_joined_classrooms(db, current_user.id)


@router.post("", response_model=JoinRequestResponse, status_code=201, summary="Demander à rejoindre une classe")
def create_join_request(
    data: JoinRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return join_request_service.create_join_request(db, current_user.id, data)


@router.delete("/leave-classroom", response_model=MessageResponse, summary="Quitter une classe")
def leave_classroom(
    data: LeaveClassroomRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return join_request_service.leave_classroom(db, current_user.id, data.classroom_id)


@router.put("/{request_id}/approve", response_model=JoinRequestResponse, summary="Approuver une demande")
def approve_join_request(
    request_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    return join_request_service.approve_join_request(db, request_id)


@router.put("/{request_id}/reject", response_model=JoinRequestResponse, summary="Refuser une demande")
def reject_join_request(
    request_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("admin")),
):
    return join_request_service.reject_join_request(db, request_id)
