"""
Service métier des médias (fichiers du stockage objet).

Règles d'accès :
  - les opérations modifiantes exigent d'être propriétaire (uploaded_by) ou admin ;
  - le téléchargement est aussi permis à tous lorsque visibility = public ;
  - un média référencé (avatar, couverture de classe, leçon) ne peut pas être supprimé.
"""

import io
import json
import logging
import re
import uuid
from typing import Iterator, List, Optional, Tuple

from fastapi import UploadFile
from sqlalchemy.orm import Session

from classroom_api.config import settings
from classroom_api.exceptions import BadRequestError, ForbiddenError, NotFoundError, UnprocessableEntityError
from classroom_api.models.media import Media
from classroom_api.models.user import User
from classroom_api.repositories import media_repo
from classroom_api.services.query_utils import build_list_response, calculate_pagination
from classroom_api.services.storage_service import StorageService

logger = logging.getLogger(__name__)

MEDIA_NOT_FOUND = "Fichier introuvable."
ACCESS_DENIED = "Vous n'avez pas accès à ce fichier."
MAX_FILES_PER_UPLOAD = 10
DEFAULT_URL_EXPIRY = 3600


def sanitize_file_name(file_name: str) -> str:
    """Ne conserve que les caractères sûrs pour une clé d'objet."""
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", file_name.strip())
    return name.strip("._") or "file"


def build_object_key(uploaded_by: Optional[int], file_name: str) -> str:
    """users/{uploader}/{8 hex}-{nom nettoyé} : deux envois du même nom ne se chevauchent pas."""
    return f"users/{uploaded_by}/{uuid.uuid4().hex[:8]}-{sanitize_file_name(file_name)}"


def file_name_from_key(object_key: str) -> str:
    base = object_key.rsplit("/", 1)[-1]
    prefix, sep, rest = base.partition("-")
    return rest if sep and len(prefix) == 8 else base


def format_size(size_bytes: int) -> str:
    """Taille lisible, ex. 10752 → "10.5 KB"."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ("KB", "MB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def _is_owner_or_admin(media: Media, user: User) -> bool:
    return media.uploaded_by == user.id or user.role == "admin"


def _check_access(media: Media, user: User) -> None:
    if not _is_owner_or_admin(media, user):
        raise ForbiddenError(ACCESS_DENIED)


def _check_read_access(media: Media, user: User) -> None:
    if media.visibility == "public":
        return
    _check_access(media, user)


def _get_media(db: Session, media_id: int) -> Media:
    media = media_repo.find_by_id(db, media_id)
    if media is None:
        raise NotFoundError(MEDIA_NOT_FOUND)
    return media


def _to_response(media: Media, storage: StorageService) -> dict:
    return {
        "id": media.id,
        "disk": media.disk,
        "bucket": media.bucket,
        "object_key": media.object_key,
        "mime_type": media.mime_type,
        "size_bytes": media.size_bytes,
        "visibility": media.visibility,
        "uploaded_by": media.uploaded_by,
        "created_at": media.created_at,
        "deleted_at": media.deleted_at,
        "url": storage.presigned_url(media.bucket, media.object_key, DEFAULT_URL_EXPIRY),
        "uploader": media.uploader,
    }


def _parse_metadata(metadata: Optional[str]) -> Optional[dict]:
    if not metadata:
        return None
    try:
        parsed = json.loads(metadata)
    except ValueError:
        raise BadRequestError("Les métadonnées doivent être un objet JSON valide.")
    if not isinstance(parsed, dict):
        raise BadRequestError("Les métadonnées doivent être un objet JSON valide.")
    return {str(k): str(v) for k, v in parsed.items()}


def upload_file(
    db: Session,
    storage: StorageService,
    file: UploadFile,
    user: User,
    visibility: str = "private",
    metadata: Optional[str] = None,
) -> dict:
    """Envoie le fichier dans le stockage puis enregistre la ligne media."""
    content = file.file.read()
    size = len(content)
    if size == 0:
        raise BadRequestError("Le fichier est vide.")
    if size > settings.MEDIA_MAX_FILE_SIZE_MB * 1024 * 1024:
        raise BadRequestError(
            f"Le fichier dépasse la taille maximale autorisée ({settings.MEDIA_MAX_FILE_SIZE_MB} MB)."
        )

    object_key = build_object_key(user.id, file.filename or "file")
    mime_type = file.content_type or "application/octet-stream"
    storage.upload(
        settings.MINIO_BUCKET,
        object_key,
        io.BytesIO(content),
        size,
        content_type=mime_type,
        metadata=_parse_metadata(metadata),
    )

    media = media_repo.create(
        db,
        disk="minio",
        bucket=settings.MINIO_BUCKET,
        object_key=object_key,
        mime_type=mime_type,
        size_bytes=size,
        visibility=visibility,
        uploaded_by=user.id,
    )
    logger.info("Média %s envoyé par l'utilisateur %s (%d octets)", media.id, user.id, size)
    return _to_response(media, storage)


def upload_multiple_files(
    db: Session,
    storage: StorageService,
    files: List[UploadFile],
    user: User,
    visibility: str = "private",
) -> List[dict]:
    if not files:
        raise BadRequestError("Aucun fichier fourni.")
    if len(files) > MAX_FILES_PER_UPLOAD:
        raise BadRequestError(f"Maximum {MAX_FILES_PER_UPLOAD} fichiers par envoi.")
    return [upload_file(db, storage, f, user, visibility) for f in files]


def get_media_by_id(db: Session, storage: StorageService, media_id: int) -> dict:
    return _to_response(_get_media(db, media_id), storage)


def get_media_by_user(
    db: Session,
    storage: StorageService,
    user: User,
    page: int,
    limit: int,
    include_deleted: bool = False,
) -> dict:
    skip, take = calculate_pagination(page, limit)
    total = media_repo.count_by_uploader(db, user.id, include_deleted)
    media_list = media_repo.find_by_uploader(db, user.id, skip, take, include_deleted)
    return build_list_response(page, limit, total, [_to_response(m, storage) for m in media_list])


def get_storage_stats(db: Session, user: User) -> dict:
    total_files = media_repo.count_by_uploader(db, user.id)
    total_size = int(media_repo.get_total_size_by_uploader(db, user.id))
    return {
        "total_files": total_files,
        "total_size": total_size,
        "total_size_formatted": format_size(total_size),
    }


def download_file(
    db: Session, storage: StorageService, media_id: int, user: User
) -> Tuple[Iterator[bytes], str, str]:
    """Retourne (flux du contenu, nom de fichier, type MIME)."""
    media = _get_media(db, media_id)
    _check_read_access(media, user)
    stream = storage.download(media.bucket, media.object_key)
    return stream, file_name_from_key(media.object_key), media.mime_type or "application/octet-stream"


def generate_download_url(
    db: Session, storage: StorageService, media_id: int, user: User, expiry_seconds: int = DEFAULT_URL_EXPIRY
) -> dict:
    media = _get_media(db, media_id)
    _check_read_access(media, user)
    url = storage.presigned_url(media.bucket, media.object_key, expiry_seconds)
    return {"url": url, "expires_in": expiry_seconds}


def update_visibility(db: Session, storage: StorageService, media_id: int, visibility: str, user: User) -> dict:
    media = _get_media(db, media_id)
    _check_access(media, user)
    media = media_repo.update(db, media, visibility=visibility)
    return _to_response(media, storage)


def rename_file(db: Session, storage: StorageService, media_id: int, new_file_name: str, user: User) -> dict:
    """
    Déplace l'objet sous une clé dérivée du nouveau nom, puis enregistre la clé.
    Si le déplacement échoue, la ligne media n'est pas modifiée.
    """
    media = _get_media(db, media_id)
    _check_access(media, user)

    new_key = build_object_key(media.uploaded_by, new_file_name)
    storage.move(media.bucket, media.object_key, new_key)
    media = media_repo.update(db, media, object_key=new_key)
    logger.info("Média %s renommé en %s", media_id, new_key)
    return _to_response(media, storage)


def _check_deletable(db: Session, media: Media, user: User) -> None:
    _check_access(media, user)
    if media_repo.is_media_in_use(db, media.id):
        raise BadRequestError("Ce fichier est encore utilisé et ne peut pas être supprimé.")


def soft_delete_media(db: Session, media_id: int, user: User) -> dict:
    media = _get_media(db, media_id)
    if media.deleted_at is not None:
        raise NotFoundError(MEDIA_NOT_FOUND)
    _check_deletable(db, media, user)
    media_repo.soft_delete(db, media)
    logger.info("Média %s supprimé (logique) par l'utilisateur %s", media_id, user.id)
    return {"message": "Fichier supprimé avec succès."}


def hard_delete_media(db: Session, storage: StorageService, media_id: int, user: User) -> dict:
    """Supprime l'objet du stockage puis la ligne media."""
    media = _get_media(db, media_id)
    _check_deletable(db, media, user)
    storage.delete(media.bucket, media.object_key)
    media_repo.hard_delete(db, media)
    logger.info("Média %s supprimé définitivement par l'utilisateur %s", media_id, user.id)
    return {"message": "Fichier supprimé définitivement."}


def restore_media(db: Session, storage: StorageService, media_id: int, user: User) -> dict:
    media = _get_media(db, media_id)
    _check_access(media, user)
    if media.deleted_at is None:
        raise UnprocessableEntityError("Ce fichier n'est pas supprimé.")
    media = media_repo.restore(db, media)
    return _to_response(media, storage)


def search_by_mime_type(db: Session, storage: StorageService, mime_type: str, page: int, limit: int) -> dict:
    skip, take = calculate_pagination(page, limit)
    total = media_repo.count_by_mime_type(db, mime_type)
    media_list = media_repo.find_by_mime_type(db, mime_type, skip, take)
    return build_list_response(page, limit, total, [_to_response(m, storage) for m in media_list])
