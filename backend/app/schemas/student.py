"""
Schémas Pydantic pour les étudiants.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, field_validator

from app.schemas.common import PatchModel, strip_not_empty


class StudentCreate(BaseModel):
    """Schéma de création d'un étudiant (POST /students)."""
    first_name: str
    last_name: str
    gender: Optional[str] = None
    birth_date: Optional[dt.date] = None
    group_id: Optional[int] = None
    user_id: Optional[int] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_not_empty(v)


class StudentUpdate(PatchModel):
    """
    Schéma de mise à jour partielle (PATCH /students/{id}).
    Le groupe est désigné par son nom ; il est résolu en group_id avant la mise à jour.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    birth_date: Optional[dt.date] = None
    group_name: Optional[str] = None

    @field_validator("first_name", "last_name", "group_name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return strip_not_empty(v)


class StudentResponse(BaseModel):
    """Schéma de réponse pour un étudiant (GET /students/{id})."""
    id: int
    first_name: str
    last_name: str
    gender: Optional[str]
    birth_date: Optional[dt.date]
    group_name: Optional[str]

    model_config = {"from_attributes": True}


class StudentListResponse(BaseModel):
    """Ligne de la liste des étudiants : nom du groupe et email du compte lié."""
    id: int
    first_name: str
    last_name: str
    group: Optional[str]
    email: Optional[str]


class StudentGPAResponse(BaseModel):
    id: int
    gpa: float
