"""
Service métier pour le cycle de vie des classes.
Suppression logique (deleted_at) ; l'archivage passe par is_archived lors de la modification.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from classroom_api.exceptions import UnprocessableEntityError
from classroom_api.models.classroom import Classroom
from classroom_api.repositories import classroom_repo
from classroom_api.schemas.classroom import ClassroomCreate, ClassroomListQuery, ClassroomUpdate
from classroom_api.services.query_utils import (
    build_list_response,
    build_order_by,
    build_search_filter,
    calculate_pagination,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "description")
CLASSROOM_NOT_FOUND = "Classe introuvable."
DUPLICATE_NAME = "Une classe avec ce nom existe déjà."


def _paginate(db: Session, conditions: list, query: ClassroomListQuery) -> dict:
    search_filter = build_search_filter(Classroom, query.search, SEARCH_FIELDS)
    if search_filter is not None:
        conditions.append(search_filter)

    skip, take = calculate_pagination(query.page, query.limit)
    total = classroom_repo.count(db, conditions)
    classrooms = classroom_repo.find_many(
        db, conditions, build_order_by(Classroom, query.sort_by, query.order), skip, take
    )
    return build_list_response(query.page, query.limit, total, classrooms)


def get_all_classrooms(db: Session, query: ClassroomListQuery) -> dict:
    conditions = [Classroom.deleted_at.is_(None)]
    if query.is_archived is not None:
        conditions.append(Classroom.is_archived.is_(query.is_archived))
    return _paginate(db, conditions, query)


def get_deleted_classrooms(db: Session, query: ClassroomListQuery) -> dict:
    return _paginate(db, [Classroom.deleted_at.is_not(None)], query)


def get_classroom_by_id(db: Session, classroom_id: int) -> dict:
    """
    Classe avec ses demandes d'adhésion en attente et ses élèves (non retirés).
    """
    classroom = classroom_repo.find_by_id(db, classroom_id)
    if classroom is None:
        raise UnprocessableEntityError(CLASSROOM_NOT_FOUND)

    return {
        "id": classroom.id,
        "name": classroom.name,
        "description": classroom.description,
        "is_archived": classroom.is_archived,
        "cover_media_id": classroom.cover_media_id,
        "created_at": classroom.created_at,
        "updated_at": classroom.updated_at,
        "deleted_at": classroom.deleted_at,
        "join_requests": [jr for jr in classroom.join_requests if jr.status == "pending"],
        "classroom_students": [cs for cs in classroom.classroom_students if cs.deleted_at is None],
    }


def create_classroom(db: Session, data: ClassroomCreate) -> Classroom:
    if classroom_repo.find_by_name(db, data.name):
        raise UnprocessableEntityError(DUPLICATE_NAME)
    classroom = classroom_repo.create(db, name=data.name, description=data.description)
    logger.info("Classe créée : %s (%s)", classroom.name, classroom.id)
    return classroom


def update_classroom(db: Session, classroom_id: int, data: ClassroomUpdate) -> Classroom:
    classroom = classroom_repo.find_by_id(db, classroom_id)
    if classroom is None or classroom.deleted_at is not None:
        raise UnprocessableEntityError(CLASSROOM_NOT_FOUND)

    existing = classroom_repo.find_by_name(db, data.name)
    if existing is not None and existing.id != classroom_id:
        raise UnprocessableEntityError(DUPLICATE_NAME)

    return classroom_repo.update(db, classroom, **data.model_dump(exclude_unset=True))


def delete_classroom(db: Session, classroom_id: int) -> dict:
    classroom = classroom_repo.find_by_id(db, classroom_id)
    if classroom is None:
        raise UnprocessableEntityError(CLASSROOM_NOT_FOUND)
    classroom_repo.update(db, classroom, deleted_at=datetime.now(timezone.utc))
    logger.info("Classe %s supprimée", classroom_id)
    return {"message": "Classe supprimée avec succès."}


def restore_classroom(db: Session, classroom_id: int) -> Classroom:
    """Restaure une classe supprimée. Une classe non supprimée est traitée comme introuvable."""
    classroom = classroom_repo.find_by_id(db, classroom_id)
    if classroom is None or classroom.deleted_at is None:
        raise UnprocessableEntityError(CLASSROOM_NOT_FOUND)
    return classroom_repo.update(db, classroom, deleted_at=None)
