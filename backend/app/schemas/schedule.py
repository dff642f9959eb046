"""
Schémas Pydantic pour l'emploi du temps.
En lecture, faculté, groupe et matière sont renvoyés par leur nom.
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from app.schemas.common import PatchModel, strip_not_empty


class ScheduleCreate(BaseModel):
    faculty_id: int
    group_id: int
    subject_id: int
    class_time: str

    @field_validator("class_time")
    @classmethod
    def class_time_not_empty(cls, v: str) -> str:
        return strip_not_empty(v, "L'horaire ne peut pas être vide.")


class ScheduleUpdate(PatchModel):
    faculty_id: Optional[int] = None
    group_id: Optional[int] = None
    subject_id: Optional[int] = None
    class_time: Optional[str] = None

    @field_validator("class_time")
    @classmethod
    def class_time_not_empty(cls, v: Optional[str]) -> Optional[str]:
        return strip_not_empty(v, "L'horaire ne peut pas être vide.")


class ScheduleResponse(BaseModel):
    id: int
    faculty: str
    group: str
    subject: str
    class_time: str

    model_config = {"from_attributes": True}
