"""
Schémas Pydantic pour les utilisateurs et leur administration.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from classroom_api.schemas.common import ListQuery


class UserResponse(BaseModel):
    """Utilisateur tel qu'exposé par l'API (jamais le hash du mot de passe)."""
    id: int
    email: str
    full_name: str
    phone_number: str
    role: str
    avatar_media_id: Optional[int] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StudentSummary(BaseModel):
    id: int
    email: str
    full_name: str
    phone_number: str
    avatar_media_id: Optional[int] = None

    model_config = {"from_attributes": True}


class UserListQuery(ListQuery):
    sort_by: Literal["created_at", "full_name", "email", "phone_number"] = Field("created_at", alias="sortBy")
    is_active: Optional[bool] = None


class UserListResponse(BaseModel):
    page: int
    limit: int
    total: int
    data: List[UserResponse]
