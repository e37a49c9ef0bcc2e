"""
Service métier des demandes d'adhésion aux classes.

Cycle de vie d'une demande (une seule ligne par couple élève/classe) :
  pending  → approved  : crée, restaure ou réactive l'appartenance ClassroomStudent
  pending  → rejected
  rejected → pending   : nouvelle demande de l'élève, même ligne réutilisée
Quitter une classe (ou en être retiré) supprime la demande du couple,
l'élève peut alors en soumettre une nouvelle.
"""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from classroom_api.exceptions import UnprocessableEntityError
from classroom_api.models.classroom import Classroom
from classroom_api.models.join_request import JoinRequest
from classroom_api.repositories import classroom_repo, classroom_student_repo, join_request_repo
from classroom_api.schemas.join_request import JoinRequestCreate, JoinRequestListQuery
from classroom_api.services.query_utils import build_list_response, build_order_by, calculate_pagination

logger = logging.getLogger(__name__)

JOIN_REQUEST_NOT_FOUND = "Demande d'adhésion introuvable."


def create_join_request(db: Session, student_id: int, data: JoinRequestCreate) -> JoinRequest:
    existing = join_request_repo.find(db, student_id, data.classroom_id)
    if existing is not None:
        if existing.status != "rejected":
            raise UnprocessableEntityError("Une demande d'adhésion existe déjà pour cette classe.")
        # Une demande refusée est rouverte sur la même ligne
        return join_request_repo.update(
            db,
            existing,
            status="pending",
            requested_at=datetime.now(timezone.utc),
            handled_at=None,
        )

    classroom = classroom_repo.find_by_id(db, data.classroom_id)
    if classroom is None or classroom.deleted_at is not None:
        raise UnprocessableEntityError("Classe introuvable.")
    if classroom.is_archived:
        raise UnprocessableEntityError("Impossible de rejoindre une classe archivée.")

    join_request = join_request_repo.create(db, student_id, data.classroom_id)
    logger.info("Demande d'adhésion %s créée (élève %s, classe %s)", join_request.id, student_id, data.classroom_id)
    return join_request


def approve_join_request(db: Session, request_id: int) -> JoinRequest:
    """
    Approuve une demande, quel que soit son statut précédent.
    L'appartenance n'est créée ou restaurée qu'après l'enregistrement du statut approved.
    """
    join_request = join_request_repo.find_by_id(db, request_id)
    if join_request is None:
        raise UnprocessableEntityError(JOIN_REQUEST_NOT_FOUND)

    join_request = join_request_repo.update(
        db, join_request, status="approved", handled_at=datetime.now(timezone.utc)
    )

    # Une seule appartenance active par couple après approbation
    membership = classroom_student_repo.find(db, join_request.classroom_id, join_request.student_id)
    if membership is None:
        classroom_student_repo.create(db, join_request.classroom_id, join_request.student_id)
    elif membership.deleted_at is not None or not membership.is_active:
        classroom_student_repo.update(db, membership, deleted_at=None, is_active=True)

    logger.info("Demande d'adhésion %s approuvée", request_id)
    return join_request


def reject_join_request(db: Session, request_id: int) -> JoinRequest:
    join_request = join_request_repo.find_by_id(db, request_id)
    if join_request is None:
        raise UnprocessableEntityError(JOIN_REQUEST_NOT_FOUND)
    if join_request.status == "rejected":
        raise UnprocessableEntityError("Cette demande d'adhésion a déjà été refusée.")
    if join_request.status == "approved":
        raise UnprocessableEntityError("Cette demande d'adhésion a déjà été approuvée, impossible de la refuser.")

    join_request = join_request_repo.update(
        db, join_request, status="rejected", handled_at=datetime.now(timezone.utc)
    )
    logger.info("Demande d'adhésion %s refusée", request_id)
    return join_request


def list_join_requests(db: Session, query: JoinRequestListQuery) -> dict:
    conditions = []
    if query.status is not None:
        conditions.append(JoinRequest.status == query.status)
    if query.classroom_id is not None:
        conditions.append(JoinRequest.classroom_id == query.classroom_id)

    skip, take = calculate_pagination(query.page, query.limit)
    total = join_request_repo.count(db, conditions)
    requests = join_request_repo.find_many(
        db, conditions, build_order_by(JoinRequest, query.sort_by, query.order), skip, take
    )
    return build_list_response(query.page, query.limit, total, requests)


def _classroom_fields(classroom: Classroom) -> dict:
    return {
        "id": classroom.id,
        "name": classroom.name,
        "description": classroom.description,
        "cover_media_id": classroom.cover_media_id,
        "is_archived": classroom.is_archived,
        "created_at": classroom.created_at,
        "updated_at": classroom.updated_at,
    }


def _is_joined(classroom: Classroom, student_id: int) -> bool:
    return any(
        cs.student_id == student_id and cs.deleted_at is None
        for cs in classroom.classroom_students
    )


def student_view_classrooms(db: Session, student_id: int) -> List[dict]:
    """Toutes les classes actives, avec l'état d'adhésion de l'élève."""
    result = []
    for classroom in classroom_repo.find_all_active(db):
        is_joined = _is_joined(classroom, student_id)
        join_request = next(
            (jr for jr in classroom.join_requests if jr.student_id == student_id), None
        )
        result.append({
            **_classroom_fields(classroom),
            "is_joined": is_joined,
            "join_request": join_request if not is_joined else None,
        })
    return result


def student_view_joined_classrooms(db: Session, student_id: int) -> List[dict]:
    return [
        _classroom_fields(classroom)
        for classroom in classroom_repo.find_all_active(db)
        if _is_joined(classroom, student_id)
    ]


def leave_classroom(db: Session, student_id: int, classroom_id: int) -> dict:
    membership = classroom_student_repo.find(db, classroom_id, student_id)
    if membership is None or membership.deleted_at is not None:
        raise UnprocessableEntityError("Vous ne faites pas partie de cette classe.")

    classroom_student_repo.update(db, membership, deleted_at=datetime.now(timezone.utc))
    join_request_repo.delete_for_pair(db, classroom_id, student_id)
    logger.info("Élève %s a quitté la classe %s", student_id, classroom_id)
    return {"message": "Vous avez quitté la classe."}
