"""
Router des médias : envoi, consultation, téléchargement et gestion des fichiers.
"""

from typing import List, Literal, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.dependencies import get_current_user, require_roles
from classroom_api.models.user import User
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.media import (
    DownloadUrlResponse,
    MediaListResponse,
    MediaResponse,
    RenameFileRequest,
    StorageStatsResponse,
    UpdateVisibilityRequest,
)
from classroom_api.services import media_service
from classroom_api.services.storage_service import StorageService, get_storage

router = APIRouter(prefix="/api/v1/media", tags=["Médias"])


@router.post("/upload", response_model=MediaResponse, status_code=201, summary="Envoyer un fichier")
def upload_file(
    file: UploadFile = File(...),
    visibility: Literal["public", "private"] = Form("private"),
    metadata: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """metadata : objet JSON optionnel, enregistré avec l'objet dans le stockage."""
    return media_service.upload_file(db, storage, file, current_user, visibility, metadata)


@router.post(
    "/upload-multiple", response_model=List[MediaResponse], status_code=201, summary="Envoyer plusieurs fichiers"
)
def upload_multiple_files(
    files: List[UploadFile] = File(...),
    visibility: Literal["public", "private"] = Form("private"),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return media_service.upload_multiple_files(db, storage, files, current_user, visibility)


@router.get("/my/list", response_model=MediaListResponse, summary="Mes fichiers")
def get_my_media(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    include_deleted: bool = Query(False),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return media_service.get_media_by_user(db, storage, current_user, page, limit, include_deleted)


@router.get("/my/stats", response_model=StorageStatsResponse, summary="Mon espace de stockage")
def get_my_stats(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return media_service.get_storage_stats(db, current_user)


@router.get("/search/by-mime-type", response_model=MediaListResponse, summary="Rechercher par type MIME")
def search_by_mime_type(
    mime_type: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    _: User = Depends(get_current_user),
):
    """Filtre par préfixe, ex. mime_type=image renvoie image/png, image/jpeg..."""
    return media_service.search_by_mime_type(db, storage, mime_type, page, limit)


@router.get("/{media_id}", response_model=MediaResponse, summary="Détail d'un fichier")
def get_media(
    media_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    _: User = Depends(get_current_user),
):
    return media_service.get_media_by_id(db, storage, media_id)


@router.get("/{media_id}/download", summary="Télécharger un fichier")
def download_file(
    media_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    stream, filename, mime_type = media_service.download_file(db, storage, media_id, current_user)
    return StreamingResponse(
        stream,
        media_type=mime_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.get("/{media_id}/download-url", response_model=DownloadUrlResponse, summary="URL de téléchargement")
def get_download_url(
    media_id: int,
    expiry_seconds: int = Query(3600, ge=1, le=7 * 24 * 3600),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return media_service.generate_download_url(db, storage, media_id, current_user, expiry_seconds)


@router.put("/{media_id}/visibility", response_model=MediaResponse, summary="Modifier la visibilité")
def update_visibility(
    media_id: int,
    data: UpdateVisibilityRequest,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return media_service.update_visibility(db, storage, media_id, data.visibility, current_user)


@router.put("/{media_id}/rename", response_model=MediaResponse, summary="Renommer un fichier")
def rename_file(
    media_id: int,
    data: RenameFileRequest,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return media_service.rename_file(db, storage, media_id, data.new_file_name, current_user)


@router.put("/{media_id}/restore", response_model=MediaResponse, summary="Restaurer un fichier")
def restore_media(
    media_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return media_service.restore_media(db, storage, media_id, current_user)


@router.delete("/{media_id}", response_model=MessageResponse, summary="Supprimer un fichier")
def soft_delete_media(
    media_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Suppression logique, refusée si le fichier est encore référencé."""
    return media_service.soft_delete_media(db, media_id, current_user)


@router.delete("/{media_id}/permanent", response_model=MessageResponse, summary="Supprimer définitivement")
def hard_delete_media(
    media_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(require_roles("admin")),
):
    return media_service.hard_delete_media(db, storage, media_id, current_user)
