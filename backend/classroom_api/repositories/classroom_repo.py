"""
Accès BDD pour les classes.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from classroom_api.models.classroom import Classroom


def count(db: Session, conditions: list) -> int:
    return db.execute(
        select(func.count()).select_from(Classroom).where(*conditions)
    ).scalar() or 0


def find_many(db: Session, conditions: list, order_by, skip: int, take: int) -> List[Classroom]:
    return db.execute(
        select(Classroom).where(*conditions).order_by(order_by).offset(skip).limit(take)
    ).scalars().all()


def find_all_active(db: Session) -> List[Classroom]:
    """Toutes les classes non supprimées, des plus récentes aux plus anciennes."""
    return db.execute(
        select(Classroom)
        .where(Classroom.deleted_at.is_(None))
        .order_by(Classroom.created_at.desc())
    ).scalars().all()


def find_by_id(db: Session, classroom_id: int) -> Optional[Classroom]:
    return db.get(Classroom, classroom_id)


def find_by_name(db: Session, name: str) -> Optional[Classroom]:
    return db.execute(select(Classroom).where(Classroom.name == name)).scalar()


def create(db: Session, name: str, description: Optional[str] = None) -> Classroom:
    classroom = Classroom(name=name, description=description)
    db.add(classroom)
    db.commit()
    db.refresh(classroom)
    return classroom


def update(db: Session, classroom: Classroom, **fields) -> Classroom:
    for field, value in fields.items():
        setattr(classroom, field, value)
    db.commit()
    db.refresh(classroom)
    return classroom
