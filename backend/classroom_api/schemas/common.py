"""
Schémas Pydantic partagés : message simple et paramètres de liste paginée.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str


class ListQuery(BaseModel):
    """Paramètres communs des listes paginées (?page=&limit=&sortBy=&order=&search=)."""
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    order: Literal["asc", "desc"] = "desc"
    search: Optional[str] = None

    model_config = {"populate_by_name": True}
