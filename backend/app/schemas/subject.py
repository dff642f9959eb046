"""
Schémas Pydantic pour les matières et leurs statistiques.
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from app.schemas.common import PatchModel, strip_not_empty


class SubjectCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        return strip_not_empty(v, "Le nom de la matière ne peut pas être vide.")


class SubjectUpdate(PatchModel):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        return strip_not_empty(v, "Le nom de la matière ne peut pas être vide.")


class SubjectResponse(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class SubjectStatsResponse(BaseModel):
    """Statistiques d'une matière : nombre d'étudiants notés et moyenne arrondie à 2 décimales."""
    name: str
    graded_students: int
    avg_grade: float
