"""
Schémas Pydantic pour les leçons (liste plate, arbre, détail).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from classroom_api.schemas.common import ListQuery


class LectureCreate(BaseModel):
    parent_id: Optional[int] = Field(None, gt=0)
    title: str = Field(max_length=200)
    content: Optional[str] = Field(None, max_length=2000)
    media_id: Optional[int] = Field(None, gt=0)

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre ne peut pas être vide.")
        return v.strip()


class LectureUpdate(BaseModel):
    """Mise à jour partielle : seuls les champs envoyés sont modifiés."""
    parent_id: Optional[int] = Field(None, gt=0)
    title: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = Field(None, max_length=2000)
    media_id: Optional[int] = Field(None, gt=0)

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("Le titre ne peut pas être vide.")
        return v.strip()


class LectureResponse(BaseModel):
    """Leçon sans son contenu (listes et arbre)."""
    id: int
    parent_id: Optional[int] = None
    title: str
    media_id: Optional[int] = None
    uploaded_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LectureDetailResponse(LectureResponse):
    content: Optional[str] = None


class LectureTreeNode(LectureResponse):
    children: List["LectureTreeNode"] = []


class LectureTreeResponse(BaseModel):
    data: List[LectureTreeNode]


class LectureListQuery(ListQuery):
    pass


class LectureListResponse(BaseModel):
    page: int
    limit: int
    total: int
    data: List[LectureResponse]
