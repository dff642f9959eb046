"""
Service métier pour les matières et leurs statistiques de notes.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError
from app.models.subject import Grade, Subject
from app.schemas.subject import SubjectCreate, SubjectResponse, SubjectStatsResponse, SubjectUpdate
from app.services.partial_update import PartialUpdate

logger = logging.getLogger(__name__)

subjects = Subject.__table__

NOT_FOUND = "Matière introuvable."


def get_subjects(db: Session) -> list[SubjectResponse]:
    rows = db.execute(select(Subject).order_by(Subject.name)).scalars().all()
    return [SubjectResponse.model_validate(s) for s in rows]


def get_subject(db: Session, subject_id: int) -> SubjectResponse:
    subject = db.get(Subject, subject_id)
    if subject is None:
        raise NotFoundError(NOT_FOUND)
    return SubjectResponse.model_validate(subject)


def create_subject(db: Session, data: SubjectCreate) -> SubjectResponse:
    subject = Subject(name=data.name)
    db.add(subject)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Une matière avec le nom '{data.name}' existe déjà.")
    db.refresh(subject)
    logger.info("Matière créée : %s (id=%s)", subject.name, subject.id)
    return SubjectResponse.model_validate(subject)


def update_subject(db: Session, subject_id: int, data: SubjectUpdate) -> SubjectResponse:
    builder = PartialUpdate(subjects).set_fields(data, ("name",))
    if builder.is_empty:
        return get_subject(db, subject_id)
    row = builder.execute(db, subject_id, [subjects.c.id, subjects.c.name], NOT_FOUND)
    return SubjectResponse.model_validate(row)


def delete_subject(db: Session, subject_id: int) -> None:
    subject = db.get(Subject, subject_id)
    if subject is None:
        raise NotFoundError(NOT_FOUND)
    db.delete(subject)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(
            "Impossible de supprimer cette matière : des créneaux, présences ou notes y font référence."
        )
    logger.info("Matière supprimée (id=%s)", subject_id)


def get_subject_stats(db: Session) -> list[SubjectStatsResponse]:
    """
    Pour chaque matière notée : nombre d'étudiants distincts notés et moyenne
    arrondie à 2 décimales. Les matières sans note n'apparaissent pas.
    """
    rows = db.execute(
        select(
            Subject.name,
            func.count(func.distinct(Grade.student_id)).label("graded_students"),
            func.round(func.avg(Grade.grade), 2).label("avg_grade"),
        )
        .join(Grade, Grade.subject_id == Subject.id)
        .group_by(Subject.id, Subject.name)
        .order_by(Subject.name)
    ).all()
    return [
        SubjectStatsResponse(
            name=row.name,
            graded_students=row.graded_students,
            avg_grade=float(row.avg_grade),
        )
        for row in rows
    ]
