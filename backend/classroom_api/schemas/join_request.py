"""
Schémas Pydantic pour les demandes d'adhésion et les vues élève des classes.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from classroom_api.schemas.common import ListQuery


class JoinRequestCreate(BaseModel):
    classroom_id: int = Field(gt=0)


class LeaveClassroomRequest(JoinRequestCreate):
    pass


class JoinRequestResponse(BaseModel):
    id: int
    student_id: int
    classroom_id: int
    status: str
    requested_at: datetime
    handled_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class JoinRequestSummary(BaseModel):
    id: int
    status: str
    requested_at: datetime
    handled_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class JoinRequestListQuery(ListQuery):
    sort_by: Literal["requested_at", "handled_at", "id"] = Field("requested_at", alias="sortBy")
    status: Optional[Literal["pending", "approved", "rejected"]] = None
    classroom_id: Optional[int] = Field(None, gt=0)


class JoinRequestListResponse(BaseModel):
    page: int
    limit: int
    total: int
    data: List[JoinRequestResponse]


class JoinedClassroomResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    cover_media_id: Optional[int] = None
    is_archived: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StudentClassroomResponse(JoinedClassroomResponse):
    """Classe vue par un élève : inscrit ou non, et sa demande en cours le cas échéant."""
    is_joined: bool
    join_request: Optional[JoinRequestSummary] = None
