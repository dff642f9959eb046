"""
Schémas Pydantic pour les présences.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel

from app.schemas.common import PatchModel


class AttendanceCreate(BaseModel):
    student_id: int
    subject_id: int
    visit_day: dt.date
    visited: bool = False


class AttendanceUpdate(PatchModel):
    student_id: Optional[int] = None
    subject_id: Optional[int] = None
    visit_day: Optional[dt.date] = None
    visited: Optional[bool] = None


class AttendanceResponse(BaseModel):
    id: int
    student_id: int
    subject_id: int
    visit_day: dt.date
    visited: bool

    model_config = {"from_attributes": True}
