"""
Schémas Pydantic pour les classes.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from classroom_api.schemas.common import ListQuery
from classroom_api.schemas.user import StudentSummary


class ClassroomCreate(BaseModel):
    name: str = Field(max_length=200)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de la classe ne peut pas être vide.")
        return v.strip()


class ClassroomUpdate(ClassroomCreate):
    is_archived: Optional[bool] = None

    @field_validator("is_archived")
    @classmethod
    def is_archived_not_null(cls, v: Optional[bool]) -> bool:
        # Absent = inchangé ; null explicite refusé (colonne NOT NULL)
        if v is None:
            raise ValueError("is_archived ne peut pas être null.")
        return v


class ClassroomResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    is_archived: bool
    cover_media_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PendingJoinRequest(BaseModel):
    id: int
    status: str
    requested_at: datetime
    handled_at: Optional[datetime] = None
    student: StudentSummary

    model_config = {"from_attributes": True}


class ClassroomMember(BaseModel):
    is_active: bool
    joined_at: datetime
    deleted_at: Optional[datetime] = None
    student: StudentSummary

    model_config = {"from_attributes": True}


class ClassroomDetailResponse(ClassroomResponse):
    """Classe avec ses demandes en attente et ses élèves."""
    join_requests: List[PendingJoinRequest]
    classroom_students: List[ClassroomMember]


class ClassroomListQuery(ListQuery):
    sort_by: Literal["created_at", "name"] = Field("created_at", alias="sortBy")
    is_archived: Optional[bool] = None


class ClassroomListResponse(BaseModel):
    page: int
    limit: int
    total: int
    data: List[ClassroomResponse]
