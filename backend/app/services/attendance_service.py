"""
Service métier pour les présences aux cours.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError
from app.models.attendance import Attendance
from app.schemas.attendance import AttendanceCreate, AttendanceResponse, AttendanceUpdate
from app.services.partial_update import PartialUpdate

logger = logging.getLogger(__name__)

attendance = Attendance.__table__

UPDATABLE_FIELDS = ("student_id", "subject_id", "visit_day", "visited")

NOT_FOUND = "Présence introuvable."


def _columns() -> list:
    return [
        attendance.c.id,
        attendance.c.student_id,
        attendance.c.subject_id,
        attendance.c.visit_day,
        attendance.c.visited,
    ]


def get_attendance_records(db: Session) -> list[AttendanceResponse]:
    rows = db.execute(select(Attendance).order_by(Attendance.id)).scalars().all()
    return [AttendanceResponse.model_validate(r) for r in rows]


def get_attendance_by_student(db: Session, student_id: int) -> list[AttendanceResponse]:
    """Présences d'un étudiant, de la plus ancienne à la plus récente."""
    rows = db.execute(
        select(Attendance)
        .where(Attendance.student_id == student_id)
        .order_by(Attendance.visit_day, Attendance.id)
    ).scalars().all()
    return [AttendanceResponse.model_validate(r) for r in rows]


def get_attendance_by_subject(db: Session, subject_id: int) -> list[AttendanceResponse]:
    rows = db.execute(
        select(Attendance)
        .where(Attendance.subject_id == subject_id)
        .order_by(Attendance.visit_day, Attendance.id)
    ).scalars().all()
    return [AttendanceResponse.model_validate(r) for r in rows]


def get_attendance(db: Session, record_id: int) -> AttendanceResponse:
    record = db.get(Attendance, record_id)
    if record is None:
        raise NotFoundError(NOT_FOUND)
    return AttendanceResponse.model_validate(record)


def create_attendance(db: Session, data: AttendanceCreate) -> AttendanceResponse:
    record = Attendance(**data.model_dump())
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Étudiant ou matière inexistant.")
    db.refresh(record)
    logger.info(
        "Présence enregistrée (id=%s) : étudiant %s, matière %s, %s",
        record.id, record.student_id, record.subject_id, record.visit_day,
    )
    return AttendanceResponse.model_validate(record)


def update_attendance(db: Session, record_id: int, data: AttendanceUpdate) -> AttendanceResponse:
    builder = PartialUpdate(attendance).set_fields(data, UPDATABLE_FIELDS)
    if builder.is_empty:
        return get_attendance(db, record_id)
    row = builder.execute(db, record_id, _columns(), NOT_FOUND)
    return AttendanceResponse.model_validate(row)


def delete_attendance(db: Session, record_id: int) -> None:
    record = db.get(Attendance, record_id)
    if record is None:
        raise NotFoundError(NOT_FOUND)
    db.delete(record)
    db.commit()
