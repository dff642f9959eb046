"""
Service métier pour les étudiants.
Lecture, création, mise à jour partielle (PATCH), suppression et moyenne générale (GPA).
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ReferencedEntityNotFoundError
from app.models.faculty import Group
from app.models.student import Student
from app.models.subject import Grade
from app.models.user import User
from app.schemas.student import (
    StudentCreate,
    StudentGPAResponse,
    StudentListResponse,
    StudentResponse,
    StudentUpdate,
)
from app.services.partial_update import PartialUpdate

logger = logging.getLogger(__name__)

students = Student.__table__
groups = Group.__table__

# Ordre déclaré des champs copiés tels quels lors d'un PATCH.
# group_name est traité à part : il est d'abord traduit en group_id.
UPDATABLE_FIELDS = ("first_name", "last_name", "gender", "birth_date")

NOT_FOUND = "Étudiant introuvable."


def _columns() -> list:
    """Colonnes de StudentResponse ; le nom du groupe est lu par sous-requête corrélée."""
    group_name = (
        select(groups.c.name)
        .where(groups.c.id == students.c.group_id)
        .scalar_subquery()
        .label("group_name")
    )
    return [
        students.c.id,
        students.c.first_name,
        students.c.last_name,
        students.c.gender,
        students.c.birth_date,
        group_name,
    ]


def get_students(db: Session) -> list[StudentListResponse]:
    """Retourne tous les étudiants avec le nom de leur groupe et l'email du compte lié."""
    rows = db.execute(
        select(
            Student.id,
            Student.first_name,
            Student.last_name,
            Group.name.label("group"),
            User.email,
        )
        .outerjoin(Group, Group.id == Student.group_id)
        .outerjoin(User, User.id == Student.user_id)
        .order_by(Student.id)
    ).all()
    return [StudentListResponse.model_validate(row, from_attributes=True) for row in rows]


def get_student(db: Session, student_id: int) -> StudentResponse:
    row = db.execute(select(*_columns()).where(students.c.id == student_id)).first()
    if row is None:
        raise NotFoundError(NOT_FOUND)
    return StudentResponse.model_validate(row)


def create_student(db: Session, data: StudentCreate) -> StudentResponse:
    """Crée un étudiant. Un group_id ou user_id inexistant est refusé par la base."""
    student = Student(**data.model_dump())
    db.add(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Groupe ou compte utilisateur inexistant, ou compte déjà lié à un étudiant.")
    db.refresh(student)
    logger.info("Étudiant créé : %s %s (id=%s)", student.first_name, student.last_name, student.id)
    return get_student(db, student.id)


def resolve_group_id(db: Session, group_name: str) -> int:
    """Traduit un nom de groupe en identifiant, ou lève ReferencedEntityNotFoundError."""
    group_id = db.execute(select(groups.c.id).where(groups.c.name == group_name)).scalar()
    if group_id is None:
        raise ReferencedEntityNotFoundError(f"Groupe '{group_name}' introuvable.")
    return group_id


def update_student(db: Session, student_id: int, data: StudentUpdate) -> StudentResponse:
    """
    Met à jour uniquement les champs fournis et retourne l'étudiant relu.

    - Le nom de groupe est résolu avant toute affectation : s'il est inconnu,
      rien n'est modifié.
    - Sans aucun champ fourni, retourne l'état courant sans UPDATE.
    - Une seule instruction UPDATE ... RETURNING sinon.
    """
    group_id = None
    if "group_name" in data.model_fields_set:
        group_id = resolve_group_id(db, data.group_name)

    builder = PartialUpdate(students).set_fields(data, UPDATABLE_FIELDS)
    if group_id is not None:
        builder.set("group_id", group_id)

    if builder.is_empty:
        return get_student(db, student_id)

    row = builder.execute(db, student_id, _columns(), NOT_FOUND)
    return StudentResponse.model_validate(row)


def delete_student(db: Session, student_id: int) -> None:
    """Supprime un étudiant. Bloqué s'il est référencé par des présences ou des notes."""
    student = db.get(Student, student_id)
    if student is None:
        raise NotFoundError(NOT_FOUND)

    db.delete(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(
            "Impossible de supprimer cet étudiant : des présences ou des notes y font référence."
        )
    logger.info("Étudiant supprimé (id=%s)", student_id)


def get_students_gpa(db: Session) -> list[StudentGPAResponse]:
    """Moyenne des notes par étudiant, arrondie à 2 décimales. Liste vide sans notes."""
    rows = db.execute(
        select(
            Grade.student_id.label("id"),
            func.round(func.avg(Grade.grade), 2).label("gpa"),
        )
        .group_by(Grade.student_id)
        .order_by(Grade.student_id)
    ).all()
    return [StudentGPAResponse(id=row.id, gpa=float(row.gpa)) for row in rows]
