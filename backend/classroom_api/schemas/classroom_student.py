"""
Schémas Pydantic pour l'administration des élèves d'une classe.
"""

from pydantic import BaseModel, Field


class ClassroomStudentUpdate(BaseModel):
    """Corps de requête identifiant une appartenance élève ↔ classe."""
    classroom_id: int = Field(gt=0)
    student_id: int = Field(gt=0)
