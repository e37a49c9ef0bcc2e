"""
Accès BDD pour les demandes d'adhésion.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from classroom_api.models.join_request import JoinRequest


def count(db: Session, conditions: list) -> int:
    return db.execute(
        select(func.count()).select_from(JoinRequest).where(*conditions)
    ).scalar() or 0


def find_many(db: Session, conditions: list, order_by, skip: int, take: int) -> List[JoinRequest]:
    return db.execute(
        select(JoinRequest).where(*conditions).order_by(order_by).offset(skip).limit(take)
    ).scalars().all()


def find_by_id(db: Session, request_id: int) -> Optional[JoinRequest]:
    return db.get(JoinRequest, request_id)


def find(db: Session, student_id: int, classroom_id: int) -> Optional[JoinRequest]:
    """Demande existante pour le couple (élève, classe), quel que soit son statut."""
    return db.execute(
        select(JoinRequest)
        .where(
            JoinRequest.student_id == student_id,
            JoinRequest.classroom_id == classroom_id,
        )
        .limit(1)
    ).scalar()


def create(db: Session, student_id: int, classroom_id: int) -> JoinRequest:
    join_request = JoinRequest(
        student_id=student_id,
        classroom_id=classroom_id,
        status="pending",
        requested_at=datetime.now(timezone.utc),
    )
    db.add(join_request)
    db.commit()
    db.refresh(join_request)
    return join_request


def update(db: Session, join_request: JoinRequest, **fields) -> JoinRequest:
    for field, value in fields.items():
        setattr(join_request, field, value)
    db.commit()
    db.refresh(join_request)
    return join_request


def delete_for_pair(db: Session, classroom_id: int, student_id: int) -> int:
    """Supprime la demande du couple (classe, élève). Retourne le nombre de lignes supprimées."""
    result = db.execute(
        delete(JoinRequest).where(
            JoinRequest.classroom_id == classroom_id,
            JoinRequest.student_id == student_id,
        )
    )
    db.commit()
    return result.rowcount
