"""
Schémas Pydantic pour les médias (fichiers du stockage objet).
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class UploaderResponse(BaseModel):
    id: int
    full_name: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class MediaResponse(BaseModel):
    id: int
    disk: str
    bucket: Optional[str]
    object_key: str
    mime_type: Optional[str]
    size_bytes: Optional[int]
    visibility: str
    uploaded_by: Optional[int]
    created_at: datetime
    deleted_at: Optional[datetime] = None
    url: Optional[str] = None  # URL d'accès au fichier (présignée)
    uploader: Optional[UploaderResponse] = None

    model_config = {"from_attributes": True}


class MediaListResponse(BaseModel):
    page: int
    limit: int
    total: int
    data: List[MediaResponse]


class StorageStatsResponse(BaseModel):
    total_files: int
    total_size: int
    total_size_formatted: str  # ex. "10.5 MB"


class UpdateVisibilityRequest(BaseModel):
    visibility: Literal["public", "private"]


class RenameFileRequest(BaseModel):
    new_file_name: str = Field(min_length=1, max_length=255)

    @field_validator("new_file_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom du fichier ne peut pas être vide.")
        return v.strip()


class DownloadUrlResponse(BaseModel):
    url: str
    expires_in: int
