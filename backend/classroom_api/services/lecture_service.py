"""
Service métier des leçons, organisées en arbre via parent_id.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from classroom_api.exceptions import NotFoundError, UnprocessableEntityError
from classroom_api.models.lecture import Lecture
from classroom_api.repositories import lecture_repo
from classroom_api.schemas.lecture import LectureCreate, LectureListQuery, LectureUpdate
from classroom_api.services.query_utils import build_list_response, build_search_filter, calculate_pagination

logger = logging.getLogger(__name__)

LECTURE_NOT_FOUND = "Leçon introuvable."


def _get_lecture(db: Session, lecture_id: int) -> Lecture:
    lecture = lecture_repo.find_by_id(db, lecture_id)
    if lecture is None:
        raise NotFoundError(LECTURE_NOT_FOUND)
    return lecture


def create_lecture(db: Session, data: LectureCreate) -> Lecture:
    if data.parent_id is not None and lecture_repo.find_by_id(db, data.parent_id) is None:
        raise NotFoundError("Leçon parente introuvable.")
    lecture = lecture_repo.create(db, **data.model_dump())
    logger.info("Leçon créée : %s (%s)", lecture.title, lecture.id)
    return lecture


def get_lecture_tree(db: Session) -> dict:
    """
    Construit la forêt des leçons non supprimées.
    Une leçon dont le parent est absent (ou supprimé) devient une racine.
    """
    lectures = lecture_repo.find_all(db)
    nodes = {
        lecture.id: {
            "id": lecture.id,
            "parent_id": lecture.parent_id,
            "title": lecture.title,
            "media_id": lecture.media_id,
            "uploaded_at": lecture.uploaded_at,
            "updated_at": lecture.updated_at,
            "deleted_at": lecture.deleted_at,
            "children": [],
        }
        for lecture in lectures
    }

    roots: List[dict] = []
    for lecture in lectures:
        node = nodes[lecture.id]
        parent = nodes.get(lecture.parent_id) if lecture.parent_id is not None else None
        if parent is None:
            roots.append(node)
        else:
            parent["children"].append(node)
    return {"data": roots}


def get_lectures(db: Session, query: LectureListQuery) -> dict:
    conditions = []
    search_filter = build_search_filter(Lecture, query.search, ("title",))
    if search_filter is not None:
        conditions.append(search_filter)

    skip, take = calculate_pagination(query.page, query.limit)
    total = lecture_repo.count(db, conditions)
    lectures = lecture_repo.find_many(db, conditions, skip, take)
    return build_list_response(query.page, query.limit, total, lectures)


def get_lecture(db: Session, lecture_id: int) -> Lecture:
    return _get_lecture(db, lecture_id)


def _check_not_descendant(db: Session, parent: Lecture, lecture_id: int) -> None:
    """Remonte les ancêtres du nouveau parent : la leçon ne doit pas y figurer."""
    seen = set()
    ancestor = parent
    while ancestor is not None and ancestor.id not in seen:
        if ancestor.id == lecture_id:
            raise UnprocessableEntityError("Une leçon ne peut pas être placée sous l'une de ses sous-leçons.")
        seen.add(ancestor.id)
        ancestor = lecture_repo.find_by_id(db, ancestor.parent_id) if ancestor.parent_id is not None else None


def update_lecture(db: Session, lecture_id: int, data: LectureUpdate) -> Lecture:
    lecture = _get_lecture(db, lecture_id)
    update_data = data.model_dump(exclude_unset=True)

    parent_id = update_data.get("parent_id")
    if parent_id is not None:
        if parent_id == lecture_id:
            raise UnprocessableEntityError("Une leçon ne peut pas être son propre parent.")
        parent = lecture_repo.find_by_id(db, parent_id)
        if parent is None:
            raise NotFoundError("Leçon parente introuvable.")
        _check_not_descendant(db, parent, lecture_id)

    return lecture_repo.update(db, lecture, **update_data)


def delete_lecture(db: Session, lecture_id: int) -> dict:
    lecture = _get_lecture(db, lecture_id)
    lecture_repo.soft_delete(db, lecture)
    logger.info("Leçon %s supprimée", lecture_id)
    return {"message": "Leçon supprimée avec succès."}
