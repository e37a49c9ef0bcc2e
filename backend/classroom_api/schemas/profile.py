"""
Schémas Pydantic pour le profil de l'utilisateur connecté.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ProfileUpdate(BaseModel):
    """Champs modifiables du profil. Les champs absents ne sont pas modifiés."""
    full_name: Optional[str] = Field(None, max_length=200)
    phone_number: Optional[str] = Field(None, max_length=20)
    avatar_media_id: Optional[int] = Field(None, gt=0)

    model_config = {"extra": "forbid"}

    @field_validator("full_name", "phone_number")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> str:
        # Appelé seulement pour une valeur envoyée : null explicite compris
        if v is None or not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=6, max_length=100)
    new_password: str = Field(min_length=6, max_length=100)
    confirm_password: str = Field(min_length=6, max_length=100)

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("La confirmation du mot de passe ne correspond pas.")
        return self
