"""
Service métier pour l'emploi du temps.
Chaque créneau est renvoyé avec les noms de sa faculté, de son groupe et de sa matière.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError
from app.models.faculty import Faculty, Group
from app.models.schedule import Schedule
from app.models.subject import Subject
from app.schemas.schedule import ScheduleCreate, ScheduleResponse, ScheduleUpdate
from app.services.partial_update import PartialUpdate

logger = logging.getLogger(__name__)

schedule = Schedule.__table__
faculties = Faculty.__table__
groups = Group.__table__
subjects = Subject.__table__

UPDATABLE_FIELDS = ("faculty_id", "group_id", "subject_id", "class_time")

NOT_FOUND = "Créneau introuvable."


def _name_of(table, fk_column, label: str):
    return (
        select(table.c.name)
        .where(table.c.id == fk_column)
        .scalar_subquery()
        .label(label)
    )


def _columns() -> list:
    return [
        schedule.c.id,
        _name_of(faculties, schedule.c.faculty_id, "faculty"),
        _name_of(groups, schedule.c.group_id, "group"),
        _name_of(subjects, schedule.c.subject_id, "subject"),
        schedule.c.class_time,
    ]


def get_schedules(db: Session) -> list[ScheduleResponse]:
    rows = db.execute(select(*_columns()).order_by(schedule.c.id)).all()
    return [ScheduleResponse.model_validate(row) for row in rows]


def get_group_schedule(db: Session, group_id: int) -> list[ScheduleResponse]:
    """Créneaux d'un groupe. Un groupe inconnu donne simplement une liste vide."""
    rows = db.execute(
        select(*_columns())
        .where(schedule.c.group_id == group_id)
        .order_by(schedule.c.id)
    ).all()
    return [ScheduleResponse.model_validate(row) for row in rows]


def get_schedule(db: Session, schedule_id: int) -> ScheduleResponse:
    row = db.execute(select(*_columns()).where(schedule.c.id == schedule_id)).first()
    if row is None:
        raise NotFoundError(NOT_FOUND)
    return ScheduleResponse.model_validate(row)


def create_schedule(db: Session, data: ScheduleCreate) -> ScheduleResponse:
    entry = Schedule(**data.model_dump())
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Faculté, groupe ou matière inexistant.")
    db.refresh(entry)
    logger.info("Créneau créé (id=%s) : %s", entry.id, entry.class_time)
    return get_schedule(db, entry.id)


def update_schedule(db: Session, schedule_id: int, data: ScheduleUpdate) -> ScheduleResponse:
    builder = PartialUpdate(schedule).set_fields(data, UPDATABLE_FIELDS)
    if builder.is_empty:
        return get_schedule(db, schedule_id)
    row = builder.execute(db, schedule_id, _columns(), NOT_FOUND)
    return ScheduleResponse.model_validate(row)


def delete_schedule(db: Session, schedule_id: int) -> None:
    entry = db.get(Schedule, schedule_id)
    if entry is None:
        raise NotFoundError(NOT_FOUND)
    db.delete(entry)
    db.commit()
