"""
Router d'administration des élèves d'une classe (admin uniquement).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.dependencies import require_roles
from classroom_api.schemas.classroom_student import ClassroomStudentUpdate
from classroom_api.schemas.common import MessageResponse
from classroom_api.services import classroom_student_service

router = APIRouter(
    prefix="/api/v1/classroom-student",
    tags=["Élèves d'une classe"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.put("/deactivate", response_model=MessageResponse, summary="Bloquer un élève")
def deactivate(data: ClassroomStudentUpdate, db: Session = Depends(get_db)):
    return classroom_student_service.deactivate(db, data)


@router.put("/activate", response_model=MessageResponse, summary="Débloquer un élève")
def activate(data: ClassroomStudentUpdate, db: Session = Depends(get_db)):
    return classroom_student_service.activate(db, data)


@router.delete("/delete-student", response_model=MessageResponse, summary="Retirer un élève")
def delete_student(data: ClassroomStudentUpdate, db: Session = Depends(get_db)):
    return classroom_student_service.delete_student(db, data)
