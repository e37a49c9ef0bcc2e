"""
Service métier pour l'administration des élèves d'une classe : blocage, déblocage, retrait.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from classroom_api.exceptions import UnprocessableEntityError
from classroom_api.models.classroom import ClassroomStudent
from classroom_api.repositories import classroom_student_repo, join_request_repo
from classroom_api.schemas.classroom_student import ClassroomStudentUpdate

logger = logging.getLogger(__name__)


def _get_membership(db: Session, data: ClassroomStudentUpdate) -> ClassroomStudent:
    membership = classroom_student_repo.find(db, data.classroom_id, data.student_id)
    if membership is None:
        raise UnprocessableEntityError("Cet élève ne fait pas partie de la classe.")
    return membership


def deactivate(db: Session, data: ClassroomStudentUpdate) -> dict:
    """Bloque l'accès de l'élève à la classe et supprime sa demande d'adhésion."""
    membership = _get_membership(db, data)
    classroom_student_repo.update(db, membership, is_active=False)
    join_request_repo.delete_for_pair(db, data.classroom_id, data.student_id)
    logger.info("Élève %s bloqué dans la classe %s", data.student_id, data.classroom_id)
    return {"message": "L'élève a été bloqué dans la classe."}


def activate(db: Session, data: ClassroomStudentUpdate) -> dict:
    membership = _get_membership(db, data)
    classroom_student_repo.update(db, membership, is_active=True)
    logger.info("Élève %s débloqué dans la classe %s", data.student_id, data.classroom_id)
    return {"message": "L'élève a été débloqué."}


def delete_student(db: Session, data: ClassroomStudentUpdate) -> dict:
    membership = _get_membership(db, data)
    classroom_student_repo.update(db, membership, deleted_at=datetime.now(timezone.utc))
    join_request_repo.delete_for_pair(db, data.classroom_id, data.student_id)
    logger.info("Élève %s retiré de la classe %s", data.student_id, data.classroom_id)
    return {"message": "L'élève a été retiré de la classe."}
