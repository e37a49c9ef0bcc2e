"""
Accès BDD pour les leçons. Les leçons supprimées (deleted_at renseigné) sont ignorées.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from classroom_api.models.lecture import Lecture


def find_all(db: Session) -> List[Lecture]:
    return db.execute(
        select(Lecture)
        .where(Lecture.deleted_at.is_(None))
        .order_by(Lecture.parent_id.asc().nulls_first(), Lecture.id.asc())
    ).scalars().all()


def count(db: Session, conditions: list) -> int:
    return db.execute(
        select(func.count()).select_from(Lecture).where(Lecture.deleted_at.is_(None), *conditions)
    ).scalar() or 0


def find_many(db: Session, conditions: list, skip: int, take: int) -> List[Lecture]:
    return db.execute(
        select(Lecture)
        .where(Lecture.deleted_at.is_(None), *conditions)
        .order_by(Lecture.id.asc())
        .offset(skip)
        .limit(take)
    ).scalars().all()


def find_by_id(db: Session, lecture_id: int) -> Optional[Lecture]:
    return db.execute(
        select(Lecture).where(Lecture.id == lecture_id, Lecture.deleted_at.is_(None))
    ).scalar()


def create(db: Session, **fields) -> Lecture:
    lecture = Lecture(**fields)
    db.add(lecture)
    db.commit()
    db.refresh(lecture)
    return lecture


def update(db: Session, lecture: Lecture, **fields) -> Lecture:
    for field, value in fields.items():
        setattr(lecture, field, value)
    db.commit()
    db.refresh(lecture)
    return lecture


def soft_delete(db: Session, lecture: Lecture) -> Lecture:
    return update(db, lecture, deleted_at=datetime.now(timezone.utc))
