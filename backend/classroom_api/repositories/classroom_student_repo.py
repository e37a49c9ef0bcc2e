"""
Accès BDD pour les appartenances élève ↔ classe.
"""

from typing import Optional

from sqlalchemy.orm import Session

from classroom_api.models.classroom import ClassroomStudent


def find(db: Session, classroom_id: int, student_id: int) -> Optional[ClassroomStudent]:
    return db.get(ClassroomStudent, (classroom_id, student_id))


def create(db: Session, classroom_id: int, student_id: int) -> ClassroomStudent:
    membership = ClassroomStudent(classroom_id=classroom_id, student_id=student_id, is_active=True)
    db.add(membership)
    db.commit()
    db.refresh(membership)
    return membership


def update(db: Session, membership: ClassroomStudent, **fields) -> ClassroomStudent:
    for field, value in fields.items():
        setattr(membership, field, value)
    db.commit()
    db.refresh(membership)
    return membership
