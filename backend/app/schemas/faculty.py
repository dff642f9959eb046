"""
Schémas Pydantic pour les facultés et les groupes.
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from app.schemas.common import PatchModel, strip_not_empty


class FacultyCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        return strip_not_empty(v, "Le nom de la faculté ne peut pas être vide.")


class FacultyUpdate(PatchModel):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        return strip_not_empty(v, "Le nom de la faculté ne peut pas être vide.")


class FacultyResponse(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class GroupCreate(BaseModel):
    name: str
    faculty_id: int

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        return strip_not_empty(v, "Le nom du groupe ne peut pas être vide.")


class GroupUpdate(PatchModel):
    """La faculté est désignée par son nom, comme le groupe d'un étudiant."""
    name: Optional[str] = None
    faculty_name: Optional[str] = None

    @field_validator("name", "faculty_name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        return strip_not_empty(v)


class GroupResponse(BaseModel):
    id: int
    name: str
    faculty_id: int
    faculty_name: Optional[str]

    model_config = {"from_attributes": True}
