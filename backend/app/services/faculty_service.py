"""
Service métier pour les facultés et leurs groupes.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ReferencedEntityNotFoundError
from app.models.faculty import Faculty, Group
from app.schemas.faculty import (
    FacultyCreate,
    FacultyResponse,
    FacultyUpdate,
    GroupCreate,
    GroupResponse,
    GroupUpdate,
)
from app.services.partial_update import PartialUpdate

logger = logging.getLogger(__name__)

faculties = Faculty.__table__
groups = Group.__table__

FACULTY_NOT_FOUND = "Faculté introuvable."
GROUP_NOT_FOUND = "Groupe introuvable."


# --- Facultés ---

def get_faculties(db: Session) -> list[FacultyResponse]:
    """Retourne toutes les facultés, triées par nom."""
    rows = db.execute(select(Faculty).order_by(Faculty.name)).scalars().all()
    return [FacultyResponse.model_validate(f) for f in rows]


def get_faculty(db: Session, faculty_id: int) -> FacultyResponse:
    faculty = db.get(Faculty, faculty_id)
    if faculty is None:
        raise NotFoundError(FACULTY_NOT_FOUND)
    return FacultyResponse.model_validate(faculty)


def create_faculty(db: Session, data: FacultyCreate) -> FacultyResponse:
    """Crée une faculté. Lève ConflictError si le nom existe déjà."""
    faculty = Faculty(name=data.name)
    db.add(faculty)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Une faculté avec le nom '{data.name}' existe déjà.")
    db.refresh(faculty)
    logger.info("Faculté créée : %s (id=%s)", faculty.name, faculty.id)
    return FacultyResponse.model_validate(faculty)


def update_faculty(db: Session, faculty_id: int, data: FacultyUpdate) -> FacultyResponse:
    builder = PartialUpdate(faculties).set_fields(data, ("name",))
    if builder.is_empty:
        return get_faculty(db, faculty_id)
    row = builder.execute(db, faculty_id, [faculties.c.id, faculties.c.name], FACULTY_NOT_FOUND)
    return FacultyResponse.model_validate(row)


def delete_faculty(db: Session, faculty_id: int) -> None:
    """Supprime une faculté. Bloqué si des groupes ou des créneaux y font référence."""
    faculty = db.get(Faculty, faculty_id)
    if faculty is None:
        raise NotFoundError(FACULTY_NOT_FOUND)
    db.delete(faculty)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(
            "Impossible de supprimer cette faculté : des groupes ou des créneaux y font référence."
        )
    logger.info("Faculté supprimée (id=%s)", faculty_id)


def resolve_faculty_id(db: Session, faculty_name: str) -> int:
    faculty_id = db.execute(select(faculties.c.id).where(faculties.c.name == faculty_name)).scalar()
    if faculty_id is None:
        raise ReferencedEntityNotFoundError(f"Faculté '{faculty_name}' introuvable.")
    return faculty_id


# --- Groupes ---

def _group_columns() -> list:
    faculty_name = (
        select(faculties.c.name)
        .where(faculties.c.id == groups.c.faculty_id)
        .scalar_subquery()
        .label("faculty_name")
    )
    return [groups.c.id, groups.c.name, groups.c.faculty_id, faculty_name]


def get_groups(db: Session) -> list[GroupResponse]:
    rows = db.execute(select(*_group_columns()).order_by(groups.c.name)).all()
    return [GroupResponse.model_validate(row) for row in rows]


def get_group(db: Session, group_id: int) -> GroupResponse:
    row = db.execute(select(*_group_columns()).where(groups.c.id == group_id)).first()
    if row is None:
        raise NotFoundError(GROUP_NOT_FOUND)
    return GroupResponse.model_validate(row)


def create_group(db: Session, data: GroupCreate) -> GroupResponse:
    """Crée un groupe rattaché à une faculté existante."""
    group = Group(name=data.name, faculty_id=data.faculty_id)
    db.add(group)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Nom de groupe '{data.name}' déjà utilisé ou faculté inexistante.")
    db.refresh(group)
    logger.info("Groupe créé : %s (id=%s)", group.name, group.id)
    return get_group(db, group.id)


def update_group(db: Session, group_id: int, data: GroupUpdate) -> GroupResponse:
    """Même principe que pour un étudiant : la faculté est résolue par son nom avant l'UPDATE."""
    faculty_id = None
    if "faculty_name" in data.model_fields_set:
        faculty_id = resolve_faculty_id(db, data.faculty_name)

    builder = PartialUpdate(groups).set_fields(data, ("name",))
    if faculty_id is not None:
        builder.set("faculty_id", faculty_id)

    if builder.is_empty:
        return get_group(db, group_id)

    row = builder.execute(db, group_id, _group_columns(), GROUP_NOT_FOUND)
    return GroupResponse.model_validate(row)


def delete_group(db: Session, group_id: int) -> None:
    group = db.get(Group, group_id)
    if group is None:
        raise NotFoundError(GROUP_NOT_FOUND)
    db.delete(group)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(
            "Impossible de supprimer ce groupe : des étudiants ou des créneaux y font référence."
        )
