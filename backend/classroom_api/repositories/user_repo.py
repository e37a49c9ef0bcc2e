"""
Accès BDD pour les utilisateurs.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from classroom_api.models.user import User


def count(db: Session, conditions: list) -> int:
    return db.execute(
        select(func.count()).select_from(User).where(*conditions)
    ).scalar() or 0


def find_many(db: Session, conditions: list, order_by, skip: int, take: int) -> List[User]:
    return db.execute(
        select(User).where(*conditions).order_by(order_by).offset(skip).limit(take)
    ).scalars().all()


def find_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(select(User).where(User.email == email)).scalar()


def find_by_phone_number(db: Session, phone_number: str) -> Optional[User]:
    return db.execute(select(User).where(User.phone_number == phone_number)).scalar()


def create(db: Session, **fields) -> User:
    user = User(**fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(db: Session, user: User, **fields) -> User:
    for field, value in fields.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user
