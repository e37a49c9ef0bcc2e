"""
Accès BDD pour les médias.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session

from classroom_api.models.classroom import Classroom
from classroom_api.models.lecture import Lecture
from classroom_api.models.media import Media
from classroom_api.models.user import User

# Colonnes qui référencent un média : tant qu'une ligne pointe dessus, il est "utilisé".
MEDIA_REFERENCES = (
    User.avatar_media_id,
    Classroom.cover_media_id,
    Lecture.media_id,
)


def create(db: Session, **fields) -> Media:
    media = Media(**fields)
    db.add(media)
    db.commit()
    db.refresh(media)
    return media


def find_by_id(db: Session, media_id: int) -> Optional[Media]:
    return db.get(Media, media_id)


def _uploader_conditions(uploaded_by: int, include_deleted: bool) -> list:
    conditions = [Media.uploaded_by == uploaded_by]
    if not include_deleted:
        conditions.append(Media.deleted_at.is_(None))
    return conditions


def find_by_uploader(
    db: Session, uploaded_by: int, skip: int, take: int, include_deleted: bool = False
) -> List[Media]:
    return db.execute(
        select(Media)
        .where(*_uploader_conditions(uploaded_by, include_deleted))
        .order_by(Media.created_at.desc())
        .offset(skip)
        .limit(take)
    ).scalars().all()


def count_by_uploader(db: Session, uploaded_by: int, include_deleted: bool = False) -> int:
    return db.execute(
        select(func.count()).select_from(Media).where(*_uploader_conditions(uploaded_by, include_deleted))
    ).scalar() or 0


def get_total_size_by_uploader(db: Session, uploaded_by: int) -> int:
    """Somme des tailles des médias non supprimés d'un utilisateur (0 si aucun)."""
    return db.execute(
        select(func.coalesce(func.sum(Media.size_bytes), 0))
        .where(Media.uploaded_by == uploaded_by, Media.deleted_at.is_(None))
    ).scalar() or 0


def find_by_mime_type(db: Session, mime_type: str, skip: int, take: int) -> List[Media]:
    return db.execute(
        select(Media)
        .where(Media.mime_type.ilike(f"{mime_type}%"), Media.deleted_at.is_(None))
        .order_by(Media.created_at.desc())
        .offset(skip)
        .limit(take)
    ).scalars().all()


def count_by_mime_type(db: Session, mime_type: str) -> int:
    return db.execute(
        select(func.count())
        .select_from(Media)
        .where(Media.mime_type.ilike(f"{mime_type}%"), Media.deleted_at.is_(None))
    ).scalar() or 0


def update(db: Session, media: Media, **fields) -> Media:
    for field, value in fields.items():
        setattr(media, field, value)
    db.commit()
    db.refresh(media)
    return media


def soft_delete(db: Session, media: Media) -> Media:
    return update(db, media, deleted_at=datetime.now(timezone.utc))


def restore(db: Session, media: Media) -> Media:
    return update(db, media, deleted_at=None)


def hard_delete(db: Session, media: Media) -> None:
    db.delete(media)
    db.commit()


def is_media_in_use(db: Session, media_id: int) -> bool:
    """True si au moins une ligne (avatar, couverture de classe, leçon) référence le média."""
    for column in MEDIA_REFERENCES:
        in_use = db.execute(select(exists().where(column == media_id))).scalar()
        if in_use:
            return True
    return False
